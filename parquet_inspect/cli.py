import argparse
import json
import logging
import sys

from parquet_inspect.dictionary import DEFAULT_MAX_DICTIONARY_ITEMS
from parquet_inspect.errors import ParquetInspectError
from parquet_inspect.inspector import ParquetInspector
from parquet_inspect.sample_data import DEFAULT_SAMPLE_ROWS

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="parquet-inspect",
        description="Print the schema, column statistics and dictionary samples of a Parquet file as JSON.",
    )
    parser.add_argument("parquet_file")
    parser.add_argument(
        "--dictionary",
        metavar="COLUMN",
        help="leaf column (name, dotted path or ordinal) whose dictionary values to sample",
    )
    parser.add_argument("--max-items", type=int, default=DEFAULT_MAX_DICTIONARY_ITEMS)
    parser.add_argument(
        "--row-group",
        type=int,
        action="append",
        help="include page-level details of this row group (repeatable)",
    )
    parser.add_argument(
        "--sample-rows",
        type=int,
        default=DEFAULT_SAMPLE_ROWS,
        help="number of leading rows to include as sample data (0 to skip)",
    )
    parser.add_argument("--log-level", default="INFO")
    return parser


def inspect(args):
    with ParquetInspector(args.parquet_file) as inspector:
        result = inspector.to_dict(sample_rows=args.sample_rows)
        if args.dictionary is not None:
            result["dictionary"] = {
                "column": args.dictionary,
                "values": inspector.dictionary_sample(args.dictionary, args.max_items),
            }
        if args.row_group:
            result["row_groups"] = [inspector.row_group(idx).to_dict() for idx in args.row_group]
    return result


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.getLevelNamesMapping()[args.log_level.upper()],
        format="%(asctime)s %(name)s [%(threadName)s] %(levelname)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        result = inspect(args)
    except (ParquetInspectError, KeyError, IndexError) as exc:
        logger.debug("Inspection failed", exc_info=True)
        print(f"parquet-inspect: error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
