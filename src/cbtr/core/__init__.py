"""Core rule-matching and execution engine for cbtr."""
