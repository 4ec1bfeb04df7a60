"""Analysis of Gradle dependency trees: conflicts, risk, duplicates, scope and diffs."""

__version__ = "0.1.0"

__all__ = [
    "diff_calculator",
    "duplicate_detector",
    "errors",
    "models",
    "multi_module_assembler",
    "risk_calculator",
    "scope_validator",
    "table_calculator",
    "tree_analysis",
]