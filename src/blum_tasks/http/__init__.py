"""HTTP transport shared by task and account clients."""
