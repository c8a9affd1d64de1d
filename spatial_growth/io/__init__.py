"""Output contracts: Arrow schemas and on-disk path conventions."""
