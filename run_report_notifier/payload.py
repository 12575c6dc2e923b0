"""Build the notification document for a finished run."""

from datetime import datetime
from zoneinfo import ZoneInfo

from run_report_notifier.config import DEFAULT_ACTIVITY_IMAGE
from run_report_notifier.duration import format_duration
from run_report_notifier.models.payload import (
    NotificationFact,
    NotificationPayload,
    NotificationSection,
)
from run_report_notifier.models.summary import OutcomeCounts, RunStatus

SUMMARY_TITLES: dict[RunStatus, str] = {
    "Success": "Success : Test Execution Summary",
    "Fail": "Failed : Test Execution Summary",
}

ACTIVITY_SUBTITLE = "Dashboard report status"


WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_NAMES = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


def format_executed_date(moment: datetime, timezone: str) -> str:
    """Render a timestamp like ``Sun, Oct 18, 2026, 9:51:00 PM`` in ``timezone``.

    Names are always English regardless of the process locale.
    """
    local = moment.astimezone(ZoneInfo(timezone))
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return (
        f"{WEEKDAY_NAMES[local.weekday()]}, {MONTH_NAMES[local.month - 1]} "
        f"{local.day}, {local.year}, "
        f"{hour}:{local.minute:02d}:{local.second:02d} {meridiem}"
    )


def format_status(counts: OutcomeCounts, duration: int) -> str:
    """Render the multi-line execution summary shown in the Status fact."""
    lines = [
        "Execution Summary:",
        f" ✅ Total Test Cases: {counts.total}",
        f" ✅ Passed: {counts.expected}",
        f" ❌ Failed: {counts.unexpected}",
        f" ⚠ Flaky: {counts.flaky}",
        f" ⏭ Skipped: {counts.skipped}",
        f" ⏱ Duration: {format_duration(duration)}",
    ]
    return "\n".join(lines)


def build_payload(
    counts: OutcomeCounts,
    duration: int,
    launch_url: str | None,
    run_status: RunStatus,
    *,
    environment: str,
    timezone: str = "Europe/Amsterdam",
    activity_image: str = DEFAULT_ACTIVITY_IMAGE,
    now: datetime | None = None,
) -> NotificationPayload:
    """Build the notification payload for a finished run.

    Args:
        counts: Per-category test counts
        duration: Run duration in milliseconds
        launch_url: Dashboard URL of the launch, or None when unresolved
        run_status: Overall run status selecting the title template
        environment: Environment label shown verbatim
        timezone: IANA zone used to render the executed date
        activity_image: Image shown next to the card title
        now: Timestamp to render; defaults to the current time

    Returns:
        The notification payload. Only the executed date depends on ``now``.

    """
    title = SUMMARY_TITLES[run_status]
    executed = now if now is not None else datetime.now().astimezone()

    facts = [
        NotificationFact(name="Environment :", value=environment),
        NotificationFact(
            name="Executed date :", value=format_executed_date(executed, timezone)
        ),
        NotificationFact(name="Status", value=format_status(counts, duration)),
        NotificationFact(name="Report Portal URL :", value=f"[Link]({launch_url or ''})"),
    ]

    return NotificationPayload(
        summary=title,
        sections=[
            NotificationSection(
                title=title,
                subtitle=ACTIVITY_SUBTITLE,
                image=activity_image,
                facts=facts,
                markdown=True,
            )
        ],
    )
