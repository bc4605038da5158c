#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Entry point for the CMS installer.
"""

import time

# Recorded before anything else is imported; the non-interactive check measures from here.
START_TIME = time.time()

import sys  # noqa: E402

from installer.main_installer import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main(start_time=START_TIME))
