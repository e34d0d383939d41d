"""Entry point for python -m photo_album."""

import sys

from photo_album.launcher import main

sys.exit(main())
