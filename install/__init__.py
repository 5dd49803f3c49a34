"""First-boot installer: seeds the root operator, reference data and root user."""
