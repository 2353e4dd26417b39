"""Click plumbing shared by the filepipe entry point."""
