"""Session, balance, farming and game collaborators."""
