import sys

from parquet_inspect.cli import main

sys.exit(main())
