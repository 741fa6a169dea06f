"""Reading and writing bitmaps on disk."""
