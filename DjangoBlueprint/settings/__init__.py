"""
Django settings module.

This package contains environment-specific settings:
- base.py: Base settings shared across all environments
- dev.py: Development environment settings
- test.py: Test environment settings
- prod.py: Production environment settings
- logging.py: Logging dict config builder
"""
