"""
Label arithmetic.

A label is a tuple of positive integers such as ``(2, 1)`` (shown ``2.1``)
naming a line and the subproofs it is nested in. Lines of a subproof come
before the line that the subproof justifies, so a label sorts *after* every
label it is a strict prefix of.
"""
from typing import Optional, Tuple

__all__ = ['Label', 'parse_label', 'format_label', 'label_less',
           'label_add_before', 'label_in_scope', 'label_within']

Label = Tuple[int, ...]

def parse_label(text: str) -> Label:
    """Convert ``'2.1'`` into ``(2, 1)``."""
    try:
        label = tuple(int(part) for part in text.split('.'))
    except ValueError:
        raise ValueError(f'invalid label: {text!r}') from None
    if not all(part > 0 for part in label):
        raise ValueError(f'invalid label: {text!r}')
    return label

def format_label(label: Optional[Label]) -> str:
    """Convert ``(2, 1)`` into ``'2.1'``; unset is empty."""
    if label is None:
        return ''
    return '.'.join(map(str, label))

def label_less(label1: Label, label2: Label) -> bool:
    """Whether ``label1`` comes before ``label2``."""
    for part1, part2 in zip(label1, label2):
        if part1 != part2:
            return part1 < part2
    return len(label1) > len(label2) # extra parts means *before*

def label_add_before(label: Label, pos: Label, delta: int) -> Label:
    """Returns the new label after ``delta`` lines are inserted
    (or removed, if negative) just before ``pos``.
    """
    depth = len(pos) - 1
    if len(label) <= depth or label[:depth] != pos[:depth]:
        return label # a different (sub)proof, or one enclosing pos
    if label[depth] < pos[depth]:
        return label # before
    # pos itself, a later sibling, or a line in the subproof of either
    return label[:depth] + (label[depth] + delta,) + label[depth + 1:]

def label_in_scope(label: Label, at: Label) -> bool:
    """Whether the line ``label`` can be cited by the line ``at``.
    Only lines ending an earlier sibling position are visible;
    the inside of a closed subproof is not.
    """
    for i, (part, at_part) in enumerate(zip(label, at)):
        if part < at_part:
            return len(label) == i + 1
        if part > at_part:
            return False
    return False # neither can see the other

def label_within(label: Label, parent: Label) -> bool:
    """Whether ``label`` is inside the subproof opened by ``parent``."""
    return len(label) > len(parent) and label[:len(parent)] == parent
