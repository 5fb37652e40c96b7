"""HTTP surface for station assignment and boundary datasets."""
