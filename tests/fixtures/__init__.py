"""
Test Fixtures - Shared Test Data and Configurations.

This package contains reusable test fixtures:
    - sample_encounters.csv: 12 encounters in the diabetic dataset layout,
      '?' marking missing values
    - sample_config.yaml: Analysis configuration over the sample file
"""
