"""GeoJSON ingestion for station districts and facilities."""
