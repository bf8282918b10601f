# Author: PB
# Maintainer: PB
# Original date: 2026.10.19
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/pinman/__init__.py

"""pinman - local image browser with a deduplicating safety net."""
