"""
linked_list.py — Singly Linked List
====================================
Nodes are drawn left to right in list order, so the element at display
index k is the k-th node reached from head.  A traversal to position p
walks p - 1 links before rewiring, exactly like the textbook loop.

Overlay exposes:
  • "current" – display index of the `current` pointer
  • "visited" – values collected so far by traverse()
"""

from typing import Any, Generator, List, Sequence

from algorithms.inputs import MAX_ELEMENTS, check_index, coerce_number, coerce_values
from algorithms.step import Operation, catalog, enter_step, highlight, insert, remove, set_flag
from structures.element import Flag
from structures.errors import ValidationError


INSERT_CODE = """\
def insert_node(head, value, position):
    # Create new node
    new_node = Node(value)

    # Insert at beginning
    if position == 0:
        new_node.next = head
        return new_node

    # Traverse to position
    current = head
    for _ in range(position - 1):
        current = current.next

    # Insert the new node
    new_node.next = current.next
    current.next = new_node

    return head"""

INSERT_STEPS = catalog([
    ((2, 3),            "Create a new node with the given value"),
    ((5, 6, 7, 8),      "Check if inserting at beginning and handle special case"),
    ((10, 11),          "Start from head to traverse to position"),
    ((12, 13),          "Traverse to the position before insertion point"),
    ((15, 16, 17),      "Link new node to next and previous node to new node"),
    ((19,),             "Return the head of the modified list"),
])

DELETE_CODE = """\
def delete_node(head, position):
    # Delete from beginning
    if position == 0:
        return head.next

    # Traverse to position
    current = head
    for _ in range(position - 1):
        current = current.next

    # Remove the node
    node_to_delete = current.next
    current.next = node_to_delete.next

    return head"""

DELETE_STEPS = catalog([
    ((2, 3, 4),         "Check if deleting from beginning and return new head"),
    ((6, 7),            "Start from head to traverse to position"),
    ((8, 9),            "Traverse to the node before deletion point"),
    ((11, 12, 13),      "Get reference and skip over the node to be deleted"),
    ((15,),             "Return the head of the modified list"),
])

TRAVERSE_CODE = """\
def traverse(head):
    # Start from head
    current = head
    values = []

    # Visit each node
    while current is not None:
        values.append(current.value)
        current = current.next

    return values"""

TRAVERSE_STEPS = catalog([
    ((2, 3, 4),         "Start traversal from head and initialize the result list"),
    ((6, 7, 8, 9),      "Loop: check node exists, add value, move to next"),
    ((11,),             "Return the collected values"),
])


def insert_node(values: Sequence[Any] = (), value: Any = None, position: Any = 0) -> Generator[Operation, None, List[Any]]:
    nodes = coerce_values(values)
    if len(nodes) >= MAX_ELEMENTS:
        raise ValidationError(f"List is full! At most {MAX_ELEMENTS} nodes can be visualised")
    number = coerce_number(value, "value")
    return _insert_node(nodes, number, check_index(position, 0, len(nodes)))


def delete_node(values: Sequence[Any] = (), position: Any = 0) -> Generator[Operation, None, List[Any]]:
    nodes = coerce_values(values)
    if not nodes:
        raise ValidationError("List is empty! Nothing to delete")
    return _delete_node(nodes, check_index(position, 0, len(nodes) - 1))


def traverse(values: Sequence[Any] = ()) -> Generator[Operation, None, List[Any]]:
    return _traverse(coerce_values(values))


def _walk_to(position: int, step: int) -> Generator[Operation, None, None]:
    """Advance `current` from head to the node just before `position`."""
    for i in range(1, position):
        yield enter_step(step, f"current = current.next (node {i})", marks=highlight((i,)), current=i)


def _insert_node(nodes: List[Any], value: Any, position: int) -> Generator[Operation, None, List[Any]]:
    yield enter_step(0, f"Creating new node with value {value}.", new_value=value)

    if position == 0:
        nodes.insert(0, value)
        yield insert(0, value, step=1, explanation=f"Added {value} at the beginning of the list.")
        yield enter_step(5, f"{value} is the new head.", marks=highlight((0,)), current=None)
        return list(nodes)

    yield enter_step(1, f"Position {position} is not 0: walk to node {position - 1} first.")
    yield enter_step(2, "current = head (node 0)", marks=highlight((0,)), current=0)
    yield from _walk_to(position, step=3)

    nodes.insert(position, value)
    yield insert(position, value, step=4, marks=highlight((position - 1,)),
                 explanation=f"Link node {position - 1} to the new node {value}.")
    yield enter_step(5, f"Inserted {value} at position {position}.", current=None)
    return list(nodes)


def _delete_node(nodes: List[Any], position: int) -> Generator[Operation, None, List[Any]]:
    if position == 0:
        yield set_flag((0,), Flag.REMOVING, step=0, explanation=f"Deleting the head node {nodes[0]}.")
        removed = nodes.pop(0)
        yield remove(0, step=0, explanation=f"head.next becomes the new head; {removed} is gone.")
        yield enter_step(4, f"Removed {removed} from the beginning of the list.", removed=removed)
        return list(nodes)

    yield enter_step(0, f"Position {position} is not 0: walk to node {position - 1} first.")
    yield enter_step(1, "current = head (node 0)", marks=highlight((0,)), current=0)
    yield from _walk_to(position, step=2)

    yield set_flag((position,), Flag.REMOVING, step=3, marks=highlight((position - 1,)),
                   explanation=f"node_to_delete = {nodes[position]}.")
    removed = nodes.pop(position)
    yield remove(position, step=3, marks=highlight((position - 1,)),
                 explanation=f"Node {position - 1} now skips over the deleted node.")
    yield enter_step(4, f"Removed {removed} from position {position}.", removed=removed, current=None)
    return list(nodes)


def _traverse(nodes: List[Any]) -> Generator[Operation, None, List[Any]]:
    collected: List[Any] = []
    yield enter_step(0, "current = head, values = []", visited=(), current=0 if nodes else None)

    for i, value in enumerate(nodes):
        collected.append(value)
        yield set_flag((i,), Flag.ACTIVE, step=1, current=i, visited=tuple(collected),
                       explanation=f"Visit node {i}: append {value}.")

    yield enter_step(2, f"Traversal complete: {collected}.", current=None, visited=tuple(collected))
    return collected
