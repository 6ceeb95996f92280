# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""Feature-scoped configuration views."""
