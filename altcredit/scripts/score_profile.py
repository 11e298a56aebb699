"""Script to score one applicant profile from a preset or explicit flags."""

import argparse
import json
import logging
from typing import List, Optional

from altcredit.common.presets import get_preset, preset_names
from altcredit.core.logging_config import LOG_FORMAT
from altcredit.models.credit_inputs import CreditInputs
from altcredit.models.enums import ScoringVariant
from altcredit.scoring.engine import ScoringEngine


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(description="Score one alternative-data credit profile.")
    parser.add_argument("--preset", type=str, default="", help="Preset name: {0}.".format(", ".join(preset_names())))
    parser.add_argument("--transactions", type=str, default=None, help="Monthly mobile-money transactions.")
    parser.add_argument("--topup", type=str, default=None, help="Average monthly airtime top-up.")
    parser.add_argument("--bills", type=str, default=None, help="Digital bills paid per month.")
    parser.add_argument("--data", type=str, default=None, help="Mobile data usage per month (MB).")
    parser.add_argument("--usage-days", type=str, default=None, help="Active phone usage days per month.")
    parser.add_argument(
        "--variant",
        type=str,
        choices=[variant.value for variant in ScoringVariant],
        default=ScoringVariant.SIMPLE.value,
        help="Scoring variant.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for the ensemble variance draw.")
    return parser


def main(argv: Optional[List[str]] = None) -> dict:
    """Score the requested profile and log the result as JSON."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.preset:
        try:
            inputs = get_preset(args.preset)
        except KeyError as exc:
            parser.error(str(exc.args[0]))
    else:
        inputs = CreditInputs.from_form(
            {
                "monthlyTransactions": args.transactions,
                "averageTopup": args.topup,
                "billsPaid": args.bills,
                "dataUsage": args.data,
                "phoneUsageDays": args.usage_days,
            }
        )

    engine = ScoringEngine(seed=args.seed)
    result = engine.compute(inputs, variant=args.variant)
    payload = result.to_dict()
    logger.info("Score result: %s", json.dumps(payload, indent=2))
    return payload


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    main()
