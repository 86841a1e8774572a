"""Practice sessions and the turns spoken inside them."""
