#!/usr/bin/env python3
"""
analyze_email.py

Run the phishing heuristics on one email (headers + body as plain text) and
print the risk report as JSON.

Usage:
    python analyze_email.py -f suspicious.txt
    cat suspicious.txt | python analyze_email.py --verifier headers
"""

import argparse
import json
import logging.config
import sys

import config
from phishlens.auth_checks import VERIFIER_NAMES, get_verifier
from phishlens.heuristics.email_analysis import (
    AnalysisError,
    EmptyEmailError,
    analyze_email_content,
)
from phishlens.rulebook import RuleBook


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Score an email for phishing risk.")
    parser.add_argument("-f", "--file", help="Path to the email text (default: stdin)")
    parser.add_argument("--verifier", choices=VERIFIER_NAMES, default=None,
                        help="Authentication verifier (default: PHISHLENS_AUTH_VERIFIER or random)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the random verifier")
    parser.add_argument("--rules", help="JSON rules file merged over the built-in heuristics")
    parser.add_argument("--indent", type=int, default=2, help="JSON indent (0 for compact)")
    return parser


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.config.dictConfig(config.LOGGING)

    if args.file:
        with open(args.file, "r", encoding="utf-8", errors="replace") as f:
            email_text = f.read()
    else:
        email_text = sys.stdin.read()

    rules = RuleBook(args.rules, watch=False).rules if args.rules else None
    verifier = get_verifier(args.verifier, seed=args.seed)

    try:
        report = analyze_email_content(email_text, verifier=verifier, rules=rules)
    except EmptyEmailError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2
    except AnalysisError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    print(json.dumps(report.as_dict(), indent=args.indent or None))
    return 0


if __name__ == "__main__":
    sys.exit(main())
