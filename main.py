
from ordtree.indexing import OrderedTree

REFERENCE_KEYS = ["S", "E", "X", "A", "R", "C", "H", "M"]


def run_smoke_test():
    print("--- OrderedTree smoke test ---")
    tree = OrderedTree()

    for key in REFERENCE_KEYS:
        tree.put(key, key)

    print(f"Inserted {len(tree)} keys, height {tree.height()}")
    print(f"Median: {tree.median()}")
    print(f"Select(0..{len(tree) - 1}): {[tree.select(r) for r in range(len(tree))]}")
    print(f"In-order: {tree.print_keys_in_order()}")
    print("Pretty:")
    print(tree.pretty_print_keys(), end="")

    tree.delete("E")
    print(f"After delete E: {tree.print_keys_in_order()}")

    tree.delete_max()
    print(f"After delete_max: {tree.print_keys_in_order()} (size {len(tree)})")


if __name__ == "__main__":
    run_smoke_test()
