"""HTTP surface for the cardflow compiler."""
