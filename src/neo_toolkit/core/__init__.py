"""Core building blocks shared by every neo-toolkit module."""
