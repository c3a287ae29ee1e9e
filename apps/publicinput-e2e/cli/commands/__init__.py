"""
@PURPOSE: CLI command groups
@OUTLINE:
  - config: show / validate environment configuration
  - accounts: inspect the test-account secret map
  - artifacts: upload / list test artifacts in Azure Blob Storage
  - run: launch the live scenarios under pytest
"""
