"""Max-flow, min-cut and Gomory-Hu tree algorithms."""
