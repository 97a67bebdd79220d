"""SQL Server provider."""
