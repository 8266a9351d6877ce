"""
Configuration management for the File Vault API.

Contains the pydantic settings and the deployment-mode aware store selection
for local-dev, mongo and memory modes.
"""
