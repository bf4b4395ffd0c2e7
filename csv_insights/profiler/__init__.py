"""Column profiling, statistics, insights and JSON export."""
