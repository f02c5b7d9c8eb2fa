"""Pure projection functions: superannuation accumulation, drawdown and budgets."""
