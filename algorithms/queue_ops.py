"""
queue_ops.py — Queue (FIFO)
============================
Index 0 is the front, the last element is the rear.  Enqueue inserts at
the rear, dequeue removes index 0, peek highlights the front.
"""

from typing import Any, Generator, List, Sequence

from algorithms.inputs import MAX_ELEMENTS, coerce_number, coerce_values
from algorithms.step import Operation, catalog, enter_step, highlight, insert, remove, set_flag
from structures.element import Flag
from structures.errors import ValidationError


ENQUEUE_CODE = """\
def enqueue(queue, value):
    # Add element to the rear of queue
    queue.items[queue.rear] = value

    # Move rear pointer forward
    queue.rear = queue.rear + 1

    # Increment queue size
    queue.size += 1

    return queue"""

ENQUEUE_STEPS = catalog([
    ((2, 3),    "Add the new element to the rear of the queue"),
    ((5, 6),    "Move the rear pointer to the next position"),
    ((8, 9),    "Increment the queue size counter"),
    ((11,),     "Return the modified queue"),
])

DEQUEUE_CODE = """\
def dequeue(queue):
    # Check if queue is empty
    if queue.size == 0:
        raise IndexError("Queue underflow")

    # Get front element
    front_element = queue.items[queue.front]

    # Move front pointer forward
    queue.front = queue.front + 1

    # Decrement queue size
    queue.size -= 1

    return front_element"""

DEQUEUE_STEPS = catalog([
    ((2, 3, 4),     "Check if the queue is empty (underflow condition)"),
    ((6, 7),        "Get reference to the front element"),
    ((9, 10),       "Move the front pointer to the next position"),
    ((12, 13),      "Decrement the queue size counter"),
    ((15,),         "Return the removed element"),
])

PEEK_CODE = """\
def peek(queue):
    # Check if queue is empty
    if queue.size == 0:
        return None

    # Return front element without removing
    return queue.items[queue.front]"""

PEEK_STEPS = catalog([
    ((2, 3, 4),     "Check if the queue is empty"),
    ((6, 7),        "Return the front element without removing it"),
])


def enqueue(values: Sequence[Any] = (), value: Any = None) -> Generator[Operation, None, List[Any]]:
    queue = coerce_values(values)
    if len(queue) >= MAX_ELEMENTS:
        raise ValidationError(f"Queue is full! At most {MAX_ELEMENTS} elements can be visualised")
    return _enqueue(queue, coerce_number(value, "value"))


def dequeue(values: Sequence[Any] = ()) -> Generator[Operation, None, Any]:
    queue = coerce_values(values)
    if not queue:
        raise ValidationError("Queue is empty! Cannot dequeue from empty queue")
    return _dequeue(queue)


def peek(values: Sequence[Any] = ()) -> Generator[Operation, None, Any]:
    queue = coerce_values(values)
    if not queue:
        raise ValidationError("Queue is empty! Nothing to peek")
    return _peek(queue)


def _enqueue(queue: List[Any], value: Any) -> Generator[Operation, None, List[Any]]:
    rear = len(queue)
    queue.append(value)
    yield insert(rear, value, step=0, explanation=f"Place {value} at the rear (index {rear}).")
    yield enter_step(1, f"rear moves to index {rear + 1}.", marks=highlight((rear,)), rear=rear + 1)
    yield enter_step(2, f"The queue holds {len(queue)} element(s).", size=len(queue))
    yield enter_step(3, f"Successfully enqueued {value} to the queue.")
    return list(queue)


def _dequeue(queue: List[Any]) -> Generator[Operation, None, Any]:
    yield enter_step(0, f"The queue holds {len(queue)} element(s), so it is not empty.", size=len(queue))
    yield set_flag((0,), Flag.HIGHLIGHTED, step=1, explanation=f"front_element = {queue[0]}.")
    yield set_flag((0,), Flag.REMOVING, step=2, explanation="The front pointer moves past it.")
    value = queue.pop(0)
    yield remove(0, step=3, explanation=f"The queue now holds {len(queue)} element(s).", size=len(queue))
    yield enter_step(4, f"Successfully dequeued {value} from the queue.", dequeued=value)
    return value


def _peek(queue: List[Any]) -> Generator[Operation, None, Any]:
    yield enter_step(0, f"The queue holds {len(queue)} element(s), so it is not empty.")
    yield set_flag((0,), Flag.HIGHLIGHTED, step=1,
                   explanation=f"Front element is {queue[0]}.", peeked=queue[0])
    return queue[0]
