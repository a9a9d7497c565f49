import argparse
import json
from pathlib import Path

from services.config.env import get_locale_config
from services.config.logger import setup_logging
from services.exports.reports import results_md
from services.formatting.locales import get_locale
from services.roi.assumptions import DEFAULT_INPUTS, inputs_from_dict, validate_inputs
from services.roi.engine import compute, results_to_dict


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='python -m services.roi.cli',
        description='Content investment ROI: savings, payback and upside scenarios',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m services.roi.cli
    python -m services.roi.cli inputs.json --report --locale es-ES
        """
    )
    parser.add_argument('inputs', nargs='?', help='JSON file with inputs (defaults when omitted)')
    parser.add_argument('--locale', default=get_locale_config().default_locale,
                        help='Display locale for --report (en-US, es-ES)')
    parser.add_argument('--report', action='store_true', help='Print the Markdown report instead of JSON')
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging()

    try:
        locale = get_locale(args.locale)
    except KeyError:
        parser.error(f"unsupported locale: {args.locale}")

    inputs = DEFAULT_INPUTS
    try:
        if args.inputs is not None:
            data = json.loads(Path(args.inputs).read_text())
            if not isinstance(data, dict):
                raise ValueError("inputs file must hold a JSON object")
            inputs = inputs_from_dict(data)
        validate_inputs(inputs)
    except (OSError, ValueError) as e:
        parser.error(str(e))

    results = compute(inputs)
    if args.report:
        print(results_md(results, locale), end="")
    else:
        print(json.dumps(results_to_dict(results), indent=2))


if __name__ == "__main__":
    main()
