#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tile an image or single-page PDF onto printable Letter pages.
"""

import image_grid_pdf.cli


if __name__ == "__main__":
	raise SystemExit(image_grid_pdf.cli.main())
