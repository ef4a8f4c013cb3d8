"""Route plugins - image derivation and file metadata."""
