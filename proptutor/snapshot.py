"""
Convert proof and chain states to and from JSON-compatible snapshots.

Tree snapshot::

    {"startProp": "P implies Q", "endProp": "...",
     "lines": [{"prop": "...", "rule": 1, "forward": false, "version": 0,
                "fixed": true, "editable": true, "editing": false,
                "args": ["2.1", null],
                "equiv": 4, "leftToRight": true, "matchNumber": -1}],
     "labels": ["1", "2.1", ...]}

``equiv``, ``leftToRight`` and ``matchNumber`` are only written for
Equivalence lines, whose ``version`` is the equivalence's version.
Chain snapshots have no labels and their lines are
``{prop, rule, leftToRight, version, matchNumber, forward}``.
"""
from __future__ import annotations
import json
import logging
from typing import Any, Mapping, Optional, Union
from .parser import ParseError, parse, stringify
from .labels import Label, parse_label, format_label, label_less
from .equivs import Equivalence, EquivRule, EquivVersion
from .infers import Inference, InferRule, InferVersion
from .proof import DEFAULT_START, DEFAULT_END, Line, ProofState, _resized
from .chain import ChainLine, ChainState

__all__ = ['SnapshotError', 'encode_proof', 'decode_proof', 'encode_chain',
           'decode_chain', 'dumps', 'loads']

logger = logging.getLogger(__name__)

class SnapshotError(ValueError):
    """The snapshot can't be turned into a state."""
    pass

def _prop(text: Any, what: str):
    if not isinstance(text, str):
        raise SnapshotError(f'{what}: expected formula text, got {text!r}')
    try:
        return parse(text)
    except ParseError as exc:
        raise SnapshotError(f'{what}: {exc.args[0]}') from exc

def _enum(cls, value: Any, what: str):
    try:
        return cls(int(value or 0))
    except (TypeError, ValueError):
        raise SnapshotError(f'{what}: bad {cls.__name__} {value!r}') from None

def _label(value: Any, what: str) -> Optional[Label]:
    if value is None:
        return None
    try:
        if isinstance(value, str):
            return parse_label(value)
        # older snapshots stored arguments as lists of numbers
        label = tuple(int(part) for part in value)
    except (TypeError, ValueError):
        raise SnapshotError(f'{what}: bad label {value!r}') from None
    if not label or min(label) < 1:
        raise SnapshotError(f'{what}: bad label {value!r}')
    return label

def _statement(data: Mapping[str, Any]):
    start = _prop(data.get('startProp', DEFAULT_START), 'startProp')
    end = _prop(data.get('endProp', DEFAULT_END), 'endProp')
    return start, end

# Tree editor

def encode_proof(state: ProofState) -> dict:
    """The snapshot of a proof."""
    lines = []
    for line in state.lines:
        obj = {
            'prop': stringify(line.prop),
            'rule': int(line.infer.rule),
            'forward': line.infer.forward,
            'version': int(line.infer.version),
            'fixed': line.fixed,
            'editable': line.editable,
            'editing': line.editing,
            'args': [None if arg is None else format_label(arg)
                     for arg in line.args],
        }
        equiv = line.infer.equiv
        if equiv is not None:
            obj['equiv'] = int(equiv.rule)
            obj['leftToRight'] = equiv.left_to_right
            obj['version'] = int(equiv.version)
            obj['matchNumber'] = line.infer.match_number
        lines.append(obj)
    return {
        'startProp': stringify(state.start),
        'endProp': stringify(state.end),
        'lines': lines,
        'labels': [format_label(label) for label in state.labels],
    }

def _decode_line(obj: Mapping[str, Any], i: int) -> Line:
    what = f'lines[{i}]'
    if not isinstance(obj, Mapping):
        raise SnapshotError(f'{what}: expected an object, got {obj!r}')
    rule = _enum(InferRule, obj.get('rule'), what)
    forward = bool(obj.get('forward', True))
    if rule is InferRule.EQUIVALENCE:
        equiv = Equivalence(
            _enum(EquivRule, obj.get('equiv'), what),
            bool(obj.get('leftToRight', True)),
            _enum(EquivVersion, obj.get('version'), what))
        try:
            match_number = int(obj.get('matchNumber', -1))
        except (TypeError, ValueError):
            raise SnapshotError(
                f'{what}: bad matchNumber {obj.get("matchNumber")!r}') from None
        infer = Inference(rule, forward, equiv=equiv, match_number=match_number)
    else:
        infer = Inference(rule, forward,
                          _enum(InferVersion, obj.get('version'), what))
    args = obj.get('args') or []
    if not isinstance(args, list):
        raise SnapshotError(f'{what}: expected a list of arguments')
    args = [_label(arg, what) for arg in args]
    if len(args) != infer.num_args():
        logger.warning('%s: resizing %d argument(s) to %d',
                       what, len(args), infer.num_args())
        args = _resized(args, infer.num_args())
    return Line(_prop(obj.get('prop'), what), infer,
                fixed=bool(obj.get('fixed', False)),
                editable=bool(obj.get('editable', True)),
                editing=bool(obj.get('editing', False)),
                args=args)

def decode_proof(data: Optional[Mapping[str, Any]]) -> ProofState:
    """The proof stored in a snapshot.
    Without lines and labels, this is the two-line proof of the statement.
    """
    data = data or {}
    start, end = _statement(data)
    lines = data.get('lines') or []
    labels = data.get('labels') or []
    if not lines or not labels:
        logger.debug('no lines in snapshot, starting a new proof')
        return ProofState.bootstrap(start, end)
    if len(lines) != len(labels):
        logger.warning('snapshot has %d lines but %d labels; keeping %d',
                       len(lines), len(labels), min(len(lines), len(labels)))
    count = min(len(lines), len(labels))
    labels = [_label(labels[i], f'labels[{i}]') for i in range(count)]
    if None in labels:
        raise SnapshotError('labels must not be null')
    for prev, label in zip(labels, labels[1:]):
        if not label_less(prev, label):
            raise SnapshotError(f'label {format_label(label)} is out of order')
    known = set(labels)
    lines = [_decode_line(lines[i], i) for i in range(count)]
    for line in lines:
        for arg in line.args:
            if arg is not None and arg not in known:
                raise SnapshotError(f'no such line: {format_label(arg)}')
    return ProofState(start=start, end=end, labels=labels, lines=lines)

# Chain editor

def encode_chain(state: ChainState) -> dict:
    """The snapshot of a chain."""
    return {
        'startProp': stringify(state.start),
        'endProp': stringify(state.end),
        'lines': [{
            'prop': stringify(line.prop),
            'rule': int(line.equiv.rule),
            'leftToRight': line.equiv.left_to_right,
            'version': int(line.equiv.version),
            'matchNumber': line.match_number,
            'forward': line.forward,
        } for line in state.lines],
    }

def decode_chain(data: Optional[Mapping[str, Any]]) -> ChainState:
    """The chain stored in a snapshot.
    Without lines, this is a chain holding only the goal.
    """
    data = data or {}
    start, end = _statement(data)
    objs = data.get('lines') or []
    if not objs:
        logger.debug('no lines in snapshot, starting a new chain')
        return ChainState.bootstrap(start, end)
    lines = []
    for i, obj in enumerate(objs):
        what = f'lines[{i}]'
        if not isinstance(obj, Mapping):
            raise SnapshotError(f'{what}: expected an object, got {obj!r}')
        equiv = Equivalence(
            _enum(EquivRule, obj.get('rule'), what),
            bool(obj.get('leftToRight', True)),
            _enum(EquivVersion, obj.get('version'), what))
        try:
            match_number = int(obj.get('matchNumber', -1))
        except (TypeError, ValueError):
            raise SnapshotError(
                f'{what}: bad matchNumber {obj.get("matchNumber")!r}') from None
        lines.append(ChainLine(_prop(obj.get('prop'), what), equiv,
                               match_number, bool(obj.get('forward', True))))
    return ChainState(start=start, end=end, lines=lines)

# Text

def dumps(state: Union[ProofState, ChainState]) -> str:
    """The snapshot of either kind of state as JSON text."""
    if isinstance(state, ChainState):
        return json.dumps(encode_chain(state), ensure_ascii=False)
    return json.dumps(encode_proof(state), ensure_ascii=False)

def loads(text: Optional[str], chain: bool = False) -> Union[ProofState, ChainState]:
    """The state stored in JSON text; empty text gives a new state."""
    data = {}
    if text:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SnapshotError(f'invalid JSON: {exc}') from exc
        if not isinstance(data, Mapping):
            raise SnapshotError('snapshot must be a JSON object')
    return decode_chain(data) if chain else decode_proof(data)
