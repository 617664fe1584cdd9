"""Allow ``python -m lambda_runtime`` as the bootstrap command."""

import sys

from lambda_runtime.main import main

sys.exit(main())
