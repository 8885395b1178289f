class SaveInProgressError(Exception):
    """Raised when a save is requested while the same edit session is still saving."""
