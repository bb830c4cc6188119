"""Allow running as: python -m rfp_requirements"""

import sys

from rfp_requirements.main import cli

if __name__ == "__main__":
    sys.exit(cli())
