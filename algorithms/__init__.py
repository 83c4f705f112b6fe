"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every visualizer the app knows about.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "bubble_sort": AlgoInfo(key, label, kind, fn, code, steps, params, …),
        …
    }

AlgoInfo is a lightweight dataclass.  The engine and UI both consume it
so adding a new visualizer is: write the driver, add one entry here.
`kind` tells the engine how to seed the initial VisualState and tells the
canvas how to draw it.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from algorithms import array_ops, linked_list, queue_ops, recursion, stack_ops
from algorithms.bubble_sort    import bubble_sort    as _bubble,    CODE as _bubble_code,    STEPS as _bubble_steps
from algorithms.selection_sort import selection_sort as _selection, CODE as _selection_code, STEPS as _selection_steps
from algorithms.insertion_sort import insertion_sort as _insertion, CODE as _insertion_code, STEPS as _insertion_steps
from algorithms.heap_sort      import heap_sort      as _heap,      CODE as _heap_code,      STEPS as _heap_steps
from algorithms.merge_sort     import merge_sort     as _merge,     CODE as _merge_code,     STEPS as _merge_steps
from algorithms.inputs import coerce_int, coerce_values
from algorithms.step import StepDescriptor
from structures.state import VisualState


# kinds of structure a driver works on
SORT        = "sort"
ARRAY       = "array"
STACK       = "stack"
QUEUE       = "queue"
LINKED_LIST = "linked_list"
RECURSION   = "recursion"
HANOI       = "hanoi"

SORT_SAMPLE = [64, 34, 25, 12, 22, 11, 90]

# kinds whose final state is a live structure the next operation can start from,
# each with the operation that can always run on it (even when empty)
GROWING_OPS: Dict[str, str] = {
    ARRAY:       "array_insert",
    STACK:       "stack_push",
    QUEUE:       "queue_enqueue",
    LINKED_LIST: "list_insert",
}


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each visualizer
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                              # registry key, e.g. "heap_sort"
    label:            str                              # human label, e.g. "Heap Sort"
    kind:             str                              # one of the kind constants above
    fn:               Callable                         # driver factory: fn(**params) -> generator
    code:             str                              # code text for the syntax panel
    steps:            Tuple[StepDescriptor, ...]       # step catalog, indexed by step_index
    params:           Dict[str, Any] = field(default_factory=dict)   # default parameters
    tags:             List[str]      = field(default_factory=list)
    complexity_time:  str            = ""
    complexity_space: str            = ""
    description:      str            = ""

    @property
    def has_values(self) -> bool:
        return "values" in self.params

    @property
    def is_structure(self) -> bool:
        return self.kind in GROWING_OPS

    def resolve(self, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Defaults overlaid with caller-supplied parameters (unknown keys are dropped)."""
        merged = dict(self.params)
        for name, value in (overrides or {}).items():
            if name in merged:
                merged[name] = value
        return merged

    def seed(self, params: Dict[str, Any]) -> VisualState:
        """The VisualState a fresh run of this visualizer starts from."""
        if self.kind == HANOI:
            return VisualState.with_pegs(coerce_int(params["disks"], "disks"))
        if self.kind == RECURSION:
            return VisualState()
        return VisualState.from_values(coerce_values(params.get("values", ())))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key":              self.key,
            "label":            self.label,
            "kind":             self.kind,
            "params":           dict(self.params),
            "tags":             list(self.tags),
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    # --- sorting -----------------------------------------------------------
    "bubble_sort": AlgoInfo(
        key="bubble_sort", label="Bubble Sort", kind=SORT, fn=_bubble,
        code=_bubble_code, steps=_bubble_steps, params={"values": SORT_SAMPLE},
        tags=["sorting", "stable", "in-place"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Repeatedly swaps adjacent out-of-order pairs. Stops early after a pass with no swaps.",
    ),

    "selection_sort": AlgoInfo(
        key="selection_sort", label="Selection Sort", kind=SORT, fn=_selection,
        code=_selection_code, steps=_selection_steps, params={"values": SORT_SAMPLE},
        tags=["sorting", "in-place"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Finds the minimum of the unsorted part and swaps it into place. At most n - 1 swaps.",
    ),

    "insertion_sort": AlgoInfo(
        key="insertion_sort", label="Insertion Sort", kind=SORT, fn=_insertion,
        code=_insertion_code, steps=_insertion_steps, params={"values": SORT_SAMPLE},
        tags=["sorting", "stable", "in-place", "adaptive"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Grows a sorted prefix by shifting larger values right and dropping the key into the gap.",
    ),

    "heap_sort": AlgoInfo(
        key="heap_sort", label="Heap Sort", kind=SORT, fn=_heap,
        code=_heap_code, steps=_heap_steps, params={"values": SORT_SAMPLE},
        tags=["sorting", "in-place"],
        complexity_time="O(n log n)", complexity_space="O(1)",
        description="Builds a max heap, then repeatedly moves the root behind a shrinking heap boundary.",
    ),

    "merge_sort": AlgoInfo(
        key="merge_sort", label="Merge Sort", kind=SORT, fn=_merge,
        code=_merge_code, steps=_merge_steps, params={"values": SORT_SAMPLE},
        tags=["sorting", "stable", "divide-and-conquer"],
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Splits the range in half, sorts both halves, then merges them. Ties go left.",
    ),

    # --- array -------------------------------------------------------------
    "array_insert": AlgoInfo(
        key="array_insert", label="Array: Insert at Index", kind=ARRAY, fn=array_ops.insert,
        code=array_ops.INSERT_CODE, steps=array_ops.INSERT_STEPS,
        params={"values": [10, 20, 30, 40, 50], "index": 2, "value": 25},
        tags=["array", "data-structure"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="Opens a gap by shifting everything after the index one slot right.",
    ),

    "array_append": AlgoInfo(
        key="array_append", label="Array: Append", kind=ARRAY, fn=array_ops.append,
        code=array_ops.INSERT_CODE, steps=array_ops.INSERT_STEPS,
        params={"values": [10, 20, 30, 40, 50], "value": 60},
        tags=["array", "data-structure"],
        complexity_time="O(1)", complexity_space="O(1)",
        description="Insert at the end: nothing needs to shift.",
    ),

    "array_delete": AlgoInfo(
        key="array_delete", label="Array: Delete at Index", kind=ARRAY, fn=array_ops.delete,
        code=array_ops.DELETE_CODE, steps=array_ops.DELETE_STEPS,
        params={"values": [10, 20, 30, 40, 50], "index": 1},
        tags=["array", "data-structure"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="Closes the gap by shifting everything after the index one slot left.",
    ),

    "array_search": AlgoInfo(
        key="array_search", label="Array: Linear Search", kind=ARRAY, fn=array_ops.search,
        code=array_ops.SEARCH_CODE, steps=array_ops.SEARCH_STEPS,
        params={"values": [10, 20, 30, 40, 50], "target": 40},
        tags=["array", "searching"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="Checks every element from left to right until the target turns up.",
    ),

    # --- stack -------------------------------------------------------------
    "stack_push": AlgoInfo(
        key="stack_push", label="Stack: Push", kind=STACK, fn=stack_ops.push,
        code=stack_ops.PUSH_CODE, steps=stack_ops.PUSH_STEPS,
        params={"values": [10, 20, 30], "value": 40},
        tags=["stack", "lifo", "data-structure"],
        complexity_time="O(1)", complexity_space="O(1)",
        description="Places a new element on top of the stack.",
    ),

    "stack_pop": AlgoInfo(
        key="stack_pop", label="Stack: Pop", kind=STACK, fn=stack_ops.pop,
        code=stack_ops.POP_CODE, steps=stack_ops.POP_STEPS,
        params={"values": [10, 20, 30]},
        tags=["stack", "lifo", "data-structure"],
        complexity_time="O(1)", complexity_space="O(1)",
        description="Removes and returns the top element. Fails on an empty stack (underflow).",
    ),

    "stack_peek": AlgoInfo(
        key="stack_peek", label="Stack: Peek", kind=STACK, fn=stack_ops.peek,
        code=stack_ops.PEEK_CODE, steps=stack_ops.PEEK_STEPS,
        params={"values": [10, 20, 30]},
        tags=["stack", "lifo", "data-structure"],
        complexity_time="O(1)", complexity_space="O(1)",
        description="Reads the top element without removing it.",
    ),

    # --- queue -------------------------------------------------------------
    "queue_enqueue": AlgoInfo(
        key="queue_enqueue", label="Queue: Enqueue", kind=QUEUE, fn=queue_ops.enqueue,
        code=queue_ops.ENQUEUE_CODE, steps=queue_ops.ENQUEUE_STEPS,
        params={"values": [5, 10, 15], "value": 20},
        tags=["queue", "fifo", "data-structure"],
        complexity_time="O(1)", complexity_space="O(1)",
        description="Adds a new element at the rear of the queue.",
    ),

    "queue_dequeue": AlgoInfo(
        key="queue_dequeue", label="Queue: Dequeue", kind=QUEUE, fn=queue_ops.dequeue,
        code=queue_ops.DEQUEUE_CODE, steps=queue_ops.DEQUEUE_STEPS,
        params={"values": [5, 10, 15]},
        tags=["queue", "fifo", "data-structure"],
        complexity_time="O(1)", complexity_space="O(1)",
        description="Removes and returns the front element. Fails on an empty queue (underflow).",
    ),

    "queue_peek": AlgoInfo(
        key="queue_peek", label="Queue: Peek", kind=QUEUE, fn=queue_ops.peek,
        code=queue_ops.PEEK_CODE, steps=queue_ops.PEEK_STEPS,
        params={"values": [5, 10, 15]},
        tags=["queue", "fifo", "data-structure"],
        complexity_time="O(1)", complexity_space="O(1)",
        description="Reads the front element without removing it.",
    ),

    # --- linked list -------------------------------------------------------
    "list_insert": AlgoInfo(
        key="list_insert", label="Linked List: Insert", kind=LINKED_LIST, fn=linked_list.insert_node,
        code=linked_list.INSERT_CODE, steps=linked_list.INSERT_STEPS,
        params={"values": [10, 20, 30], "value": 25, "position": 2},
        tags=["linked-list", "data-structure"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="Walks to the node before the position and rewires two links.",
    ),

    "list_delete": AlgoInfo(
        key="list_delete", label="Linked List: Delete", kind=LINKED_LIST, fn=linked_list.delete_node,
        code=linked_list.DELETE_CODE, steps=linked_list.DELETE_STEPS,
        params={"values": [10, 20, 30], "position": 1},
        tags=["linked-list", "data-structure"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="Walks to the node before the position and links past the deleted node.",
    ),

    "list_traverse": AlgoInfo(
        key="list_traverse", label="Linked List: Traverse", kind=LINKED_LIST, fn=linked_list.traverse,
        code=linked_list.TRAVERSE_CODE, steps=linked_list.TRAVERSE_STEPS,
        params={"values": [10, 20, 30]},
        tags=["linked-list", "traversal"],
        complexity_time="O(n)", complexity_space="O(n)",
        description="Follows next pointers from head, collecting every value.",
    ),

    # --- recursion ---------------------------------------------------------
    "factorial": AlgoInfo(
        key="factorial", label="Factorial (direct)", kind=RECURSION, fn=recursion.factorial,
        code=recursion.FACTORIAL.code, steps=recursion.FACTORIAL.steps, params={"n": 5},
        tags=["recursion", "direct"],
        complexity_time="O(n)", complexity_space="O(n)",
        description="A function calling itself directly: n! = n * (n - 1)!.",
    ),

    "sum_to": AlgoInfo(
        key="sum_to", label="Sum of N (direct)", kind=RECURSION, fn=recursion.sum_to,
        code=recursion.SUM_TO.code, steps=recursion.SUM_TO.steps, params={"n": 5},
        tags=["recursion", "direct"],
        complexity_time="O(n)", complexity_space="O(n)",
        description="Sum of the first n natural numbers.",
    ),

    "power": AlgoInfo(
        key="power", label="Power (direct)", kind=RECURSION, fn=recursion.power,
        code=recursion.POWER.code, steps=recursion.POWER.steps, params={"base": 2, "exp": 5},
        tags=["recursion", "direct"],
        complexity_time="O(exp)", complexity_space="O(exp)",
        description="base ** exp, one multiplication per call.",
    ),

    "tail_factorial": AlgoInfo(
        key="tail_factorial", label="Factorial (tail)", kind=RECURSION, fn=recursion.tail_factorial,
        code=recursion.TAIL_FACTORIAL.code, steps=recursion.TAIL_FACTORIAL.steps, params={"n": 5},
        tags=["recursion", "tail"],
        complexity_time="O(n)", complexity_space="O(n)",
        description="The recursive call is the last thing each frame does; an accumulator carries the product.",
    ),

    "is_even": AlgoInfo(
        key="is_even", label="Even / Odd (indirect)", kind=RECURSION, fn=recursion.is_even,
        code=recursion.EVEN_ODD.code, steps=recursion.EVEN_ODD.steps, params={"n": 4},
        tags=["recursion", "indirect"],
        complexity_time="O(n)", complexity_space="O(n)",
        description="Two functions calling each other in a cycle.",
    ),

    "print_reverse": AlgoInfo(
        key="print_reverse", label="Print Numbers (head)", kind=RECURSION, fn=recursion.print_reverse,
        code=recursion.PRINT_REVERSE.code, steps=recursion.PRINT_REVERSE.steps, params={"n": 4},
        tags=["recursion", "head"],
        complexity_time="O(n)", complexity_space="O(n)",
        description="The work happens after the recursive call returns, so output comes out on the way back up.",
    ),

    "fibonacci": AlgoInfo(
        key="fibonacci", label="Fibonacci (tree)", kind=RECURSION, fn=recursion.fibonacci,
        code=recursion.FIBONACCI.code, steps=recursion.FIBONACCI.steps, params={"n": 5},
        tags=["recursion", "tree"],
        complexity_time="O(2^n)", complexity_space="O(n)",
        description="Two recursive calls per frame: the call tree doubles at every level.",
    ),

    "count_paths": AlgoInfo(
        key="count_paths", label="Grid Paths (tree)", kind=RECURSION, fn=recursion.count_paths,
        code=recursion.COUNT_PATHS.code, steps=recursion.COUNT_PATHS.steps,
        params={"rows": 3, "cols": 3},
        tags=["recursion", "tree"],
        complexity_time="O(2^(rows + cols))", complexity_space="O(rows + cols)",
        description="Counts monotone paths across a grid by branching down and right.",
    ),

    "hanoi": AlgoInfo(
        key="hanoi", label="Tower of Hanoi", kind=HANOI, fn=recursion.hanoi,
        code=recursion.HANOI.code, steps=recursion.HANOI.steps, params={"disks": 3},
        tags=["recursion", "tree"],
        complexity_time="O(2^n)", complexity_space="O(n)",
        description="Moves a tower of disks between three pegs in exactly 2^n - 1 moves.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered visualizers in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_tag",
    "SORT_SAMPLE",
    "GROWING_OPS",
    "SORT", "ARRAY", "STACK", "QUEUE", "LINKED_LIST", "RECURSION", "HANOI",
]
