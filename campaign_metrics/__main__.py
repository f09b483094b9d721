"""Command line entry point: score a campaigns payload file.

Usage:
    python -m campaign_metrics exports/campaigns.json
    python -m campaign_metrics exports/campaigns.json --campaign 1203 --log-level DEBUG
"""

import argparse
import json
import sys
from pathlib import Path

from .exceptions import MetricsError
from .logging import get_logger, setup_logging
from .services.report_service import CampaignReportService
from .settings import get_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="campaign-metrics",
        description="Normalize and score a Meta campaigns payload.",
    )
    parser.add_argument("payload", type=Path, help="Campaigns JSON file")
    parser.add_argument(
        "--campaign",
        help="Print the full scorecard of one campaign instead of the summary",
    )
    parser.add_argument("--log-level", default=None, help="Overrides the configured level")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(args.log_level or settings.log_level)
    logger = get_logger(__name__)

    service = CampaignReportService(settings=settings)
    try:
        output = service.generate_report(args.payload)
    except MetricsError as e:
        logger.error("report_failed", error=str(e))
        return 1

    if args.campaign is None:
        print(json.dumps(service.generate_summary_dict(output), indent=2, default=str))
        return 0

    for scorecard in output.scorecards:
        if scorecard.campaign.id == args.campaign:
            print(scorecard.to_json())
            return 0

    logger.error("campaign_not_found", campaign_id=args.campaign)
    return 1


if __name__ == "__main__":
    sys.exit(main())
