"""CSV ingestion: turns an uploaded file into loosely-typed records."""
