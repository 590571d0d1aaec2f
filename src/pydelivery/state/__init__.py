"""State/store layer.

Single source of truth for the weight accumulated per postal code.
Both the input pump and the summary scheduler reach it only through
:class:`~pydelivery.state.store.WeightStore`.
"""
