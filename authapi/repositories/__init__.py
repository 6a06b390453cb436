"""Storage collaborators: persistence behind a small, typed failure contract."""
