"""Policy tables for every scoring decision, grouped by the component that uses them."""
