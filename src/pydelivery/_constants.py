"""Shared numeric constants."""

from __future__ import annotations

from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, ROUND_HALF_EVEN, Context

#: Arithmetic context for weights. The input pattern puts no bound on the
#: number of integer digits, so sums and rounding run without a precision
#: limit and never raise on long values.
WEIGHT_CONTEXT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN, rounding=ROUND_HALF_EVEN)
