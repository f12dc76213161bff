"""Pipeline orchestration and input column checks."""
