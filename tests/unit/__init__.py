"""
Unit Tests - Testing Individual Components in Isolation.

Test Files:
    - test_csv_reader.py: Loading and previews
    - test_aggregation.py: Grouped statistics
    - test_row_filter.py: Predicates and row filtering
    - test_boxplot.py: Boxplot rendering and tick relabelling
    - test_config_loader.py: Configuration loading/validation
    - test_validators.py: Data and column validation
    - test_observability_adapters.py: Metrics collector and audit logger
"""
