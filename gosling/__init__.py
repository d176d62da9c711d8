"""GoslingUtils agent core: world model, routine stack and the per-tick driver."""
