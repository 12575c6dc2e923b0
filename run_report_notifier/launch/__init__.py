"""Launch-tracking service integration."""

from run_report_notifier.launch.client import ReportPortalClient
from run_report_notifier.launch.resolver import LaunchResolver, build_launch_url

__all__ = ["LaunchResolver", "ReportPortalClient", "build_launch_url"]
