#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
config.py

Configuration constants and defaults for the hospital billing engine.

Key idea: the engine itself is pure
------------------------------------
Nothing here is read per-calculation from the outside world except these
module-level defaults. Callers that need different values per request pass them
explicitly (e.g. CalculationInput.timezone, the `now` argument).
"""

import os

# ---------------------------------------------------------------------
# Timezone used for per-calendar-date billing
# ---------------------------------------------------------------------
# DEFAULT_TIMEZONE:
# - IANA name used when a CalculationInput does not carry its own timezone.
# - Only affects the per-calendar-date model; 24-hour periods are always
#   measured on UTC instants.
DEFAULT_TIMEZONE = os.getenv("HOSPITAL_BILLING_TIMEZONE", "UTC")

# ---------------------------------------------------------------------
# Currency symbol for human-readable summaries
# ---------------------------------------------------------------------
# CURRENCY_SYMBOL:
# - Prefix used in CalculationResult.billing_details and the Markdown renderer.
# - Purely cosmetic; amounts are currency-agnostic decimals.
CURRENCY_SYMBOL = os.getenv("HOSPITAL_BILLING_CURRENCY_SYMBOL", "₹")

# ---------------------------------------------------------------------
# Billing-model alias definitions
# ---------------------------------------------------------------------
# DEFINITIONS_DIR:
# - Folder holding YAML/JSON alias tables for billing-model tags.
# - Empty means the packaged hospital_billing/charge_models/definitions.
DEFINITIONS_DIR = os.getenv("HOSPITAL_BILLING_DEFINITIONS_DIR", "").strip()
