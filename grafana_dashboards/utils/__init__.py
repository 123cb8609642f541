# Copyright 2025 CNOE Contributors
# SPDX-License-Identifier: Apache-2.0

from .logging import JSONFormatter, setup_logging

__all__ = ["JSONFormatter", "setup_logging"]
