"""Pricers operating on :class:`~bs_calculator.types.ContractParameters`."""
