"""File Vault API: store named files and serve them back byte for byte."""
