import sys

from orghub_pwa.runner import main

if __name__ == "__main__":
    sys.exit(main())
