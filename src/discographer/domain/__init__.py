"""Domain layer: records, ports and the ingestion pipeline."""
