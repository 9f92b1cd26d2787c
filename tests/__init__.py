# Policyrates Test Suite
# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Policyrates test suite.

Unit tests per module under ``unit/`` and end-to-end rate scenarios under
``integration/``.
"""
