import sys

from binance_api.cli import main

sys.exit(main())
