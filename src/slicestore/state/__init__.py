"""State/store layer.

This package owns the single state cell of a store, the replace/merge
update policy, and the listener registry that is notified after every
update.
"""
