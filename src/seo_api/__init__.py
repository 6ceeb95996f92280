# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""SEO & Page metadata service."""

__version__ = "0.1.0"
