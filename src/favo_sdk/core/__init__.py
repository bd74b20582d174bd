"""Core building blocks shared by the SDK feature clients."""
