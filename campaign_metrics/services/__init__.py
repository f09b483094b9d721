from .cache import MetricsCache
from .report_service import CampaignReportService, ReportOutput

__all__ = ["CampaignReportService", "MetricsCache", "ReportOutput"]
