"""GroupCart: shared shopping lists for groups."""
