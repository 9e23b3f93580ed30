"""HTTP interface for the product debate engine."""
