# Shared helpers for the GigMarket backend: service results, authorization policy,
# API error mapping, logging and transaction utilities.
