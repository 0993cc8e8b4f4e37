"""Demo applications runnable behind the reference engine."""
