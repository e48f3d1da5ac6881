from ordtree.indexing import OrderedTree, TreePreconditionError, EmptyTreeError

__all__ = ["OrderedTree", "TreePreconditionError", "EmptyTreeError"]
