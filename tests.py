"""Test all of proptutor"""
import json
import unittest
import proptutor
from proptutor import parse, stringify, InferRule, InferVersion, EquivRule, \
     EquivVersion, Equivalence, Inference, ProofState, ChainState
from proptutor.infers import ARITY, UNSUPPORTED
from proptutor.equivs import IRREVERSIBLE

P = proptutor.Variable('P')
Q = proptutor.Variable('Q')
R = proptutor.Variable('R')

def assumption():
    return Inference(InferRule.ASSUMPTION, forward=False)

class LabelOrderMixin:
    """Shared checks that every proof must pass after an edit"""

    def assertLabelsOrdered(self, state):
        for first, second in zip(state.labels, state.labels[1:]):
            self.assertTrue(proptutor.label_less(first, second),
                            f'{first} should come before {second}')

    def assertArgsResolve(self, state):
        for label, line in zip(state.labels, state.lines):
            for arg in line.args:
                if arg is None:
                    continue
                self.assertIn(arg, state.labels,
                              f'line {label} cites missing line {arg}')
                if line.forward:
                    self.assertIn(arg, state.labels_before(label),
                                  f'line {label} cites {arg} out of scope')

class TestLeaves(unittest.TestCase):
    """Test the leaves of the proposition tree"""

    def test_equality(self):
        """Equality is structural and order-sensitive"""
        self.assertEqual(proptutor.conjunction(P, Q),
                         proptutor.Operator(proptutor.Logic.AND, P, Q),
                         "same structure should be equal")
        self.assertNotEqual(proptutor.conjunction(P, Q),
                            proptutor.conjunction(Q, P),
                            "commutativity is a rule, not equality")
        self.assertNotEqual(proptutor.conjunction(P, Q),
                            proptutor.disjunction(P, Q),
                            "different operators should differ")
        self.assertEqual(proptutor.Constant(True), proptutor.TRUE)
        self.assertIsNot(proptutor.Variable('P'), P,
                         "equal propositions need not be identical")

    def test_kinds(self):
        """Every variant reports its kind and rank"""
        self.assertIs(proptutor.TRUE.kind, proptutor.Kind.TRUE)
        self.assertIs(proptutor.FALSE.kind, proptutor.Kind.FALSE)
        self.assertIs(P.kind, proptutor.Kind.VARIABLE)
        self.assertIs(proptutor.Negation(P).kind, proptutor.Kind.NEGATION)
        self.assertIs(proptutor.implication(P, Q).kind, proptutor.Kind.IMPLIES)
        self.assertLess(proptutor.Kind.AND.value, proptutor.Kind.OR.value,
                        "and binds tighter than or")

    def test_subterms(self):
        """Pre-order traversal: root, then left before right"""
        prop = parse('not P and (Q or R)')
        self.assertEqual(list(proptutor.subterms(prop)), [
            prop, proptutor.Negation(P), P, proptutor.disjunction(Q, R), Q, R
        ], "wrong traversal order")

    def test_format(self):
        """Unicode glyphs and minimal parentheses"""
        self.assertEqual(str(parse('P implies Q implies R')), 'P → Q → R')
        self.assertEqual(str(parse('(P implies Q) implies R')), '(P → Q) → R')
        self.assertEqual(str(parse('P or Q or R')), 'P ∨ Q ∨ R')
        self.assertEqual(str(parse('P or (Q or R)')), 'P ∨ (Q ∨ R)')
        self.assertEqual(str(parse('not (P and Q) implies R')), '¬(P ∧ Q) → R')
        self.assertEqual(str(parse('not not T')), '¬¬T')
        self.assertEqual(str(parse('(P or Q) and R')), '(P ∨ Q) ∧ R')

    def test_highlight(self):
        """Highlighted sub-propositions are found by identity"""
        prop = parse('not not P and not not Q')
        self.assertEqual(proptutor.format_prop(prop, fwd=[prop.right]),
                         '¬¬P ∧ [¬¬Q]', "forward match not marked")
        self.assertEqual(proptutor.format_prop(prop, back=[prop.left.arg]),
                         '¬{¬P} ∧ ¬¬Q', "backward match not marked")
        self.assertEqual(proptutor.format_prop(prop, fwd=[parse('not not Q')]),
                         '¬¬P ∧ ¬¬Q', "an equal copy is not the same node")

class TestParser(unittest.TestCase):
    """Test the formula grammar"""

    def test_implies_right_assoc(self):
        """implies groups to the right"""
        self.assertEqual(parse('P implies Q implies R'),
                         proptutor.implication(P, proptutor.implication(Q, R)))

    def test_precedence(self):
        """not, then and, then or, then implies"""
        self.assertEqual(
            parse('not T or not F and not R'),
            proptutor.disjunction(
                proptutor.Negation(proptutor.TRUE),
                proptutor.conjunction(proptutor.Negation(proptutor.FALSE),
                                      proptutor.Negation(R))))
        self.assertEqual(parse('P or Q and R implies P'),
                         proptutor.implication(
                             proptutor.disjunction(P, proptutor.conjunction(Q, R)),
                             P))
        self.assertEqual(parse('P and Q and R'),
                         proptutor.conjunction(proptutor.conjunction(P, Q), R),
                         "and groups to the left")
        self.assertEqual(parse('not not P'),
                         proptutor.Negation(proptutor.Negation(P)))

    def test_names(self):
        """Identifiers and constants"""
        self.assertIs(parse('T'), proptutor.TRUE)
        self.assertIs(parse('F'), proptutor.FALSE)
        self.assertEqual(parse('Tom'), proptutor.Variable('Tom'),
                         "only a lone T is a constant")
        self.assertEqual(parse('  Rain2  '), proptutor.Variable('Rain2'),
                         "whitespace is insignificant")

    def test_errors(self):
        """Malformed text raises ParseError with a column"""
        with self.assertRaises(proptutor.ParseError) as ctx:
            parse('P and')
        self.assertEqual(ctx.exception.column, 5)
        with self.assertRaises(proptutor.ParseError) as ctx:
            parse('P Q')
        self.assertEqual(ctx.exception.column, 2)
        for text in ('', '(P', 'P)', 'P & Q', 'p', 'and P'):
            with self.assertRaises(proptutor.ParseError, msg=repr(text)):
                parse(text)
        self.assertIsNone(proptutor.try_parse('('))
        self.assertIsNone(proptutor.try_parse(None))
        self.assertEqual(proptutor.try_parse('P'), P)

    def test_stringify(self):
        """ASCII output that parses back to the same tree"""
        self.assertEqual(stringify(parse('not (P and Q) implies R')),
                         'not (P and Q) implies R')
        self.assertEqual(stringify(proptutor.disjunction(
            P, proptutor.disjunction(Q, R))), 'P or (Q or R)')
        self.assertEqual(stringify(proptutor.implication(
            proptutor.implication(P, Q), R)), '(P implies Q) implies R')
        for text in ('P implies Q implies R', 'not T or not F and not R',
                     '(P or Q) and (not P or R)', 'not not (P implies F)',
                     'P and (Q and R)', '((P))'):
            prop = parse(text)
            self.assertEqual(parse(stringify(prop)), prop,
                             f'{text!r} did not survive stringify')

    def test_statement(self):
        """Each field of a statement is checked on its own"""
        stmt = proptutor.check_statement('P implies Q', 'Q implies P')
        self.assertTrue(stmt.valid)
        self.assertEqual(stmt.start, proptutor.implication(P, Q))
        stmt = proptutor.check_statement('P', 'Q and')
        self.assertFalse(stmt.valid)
        self.assertEqual(stmt.start, P, "the good field still parses")
        self.assertIsNone(stmt.end)
        self.assertIsNone(stmt.start_error)
        self.assertIn('column 5', stmt.end_error)

class TestLabels(unittest.TestCase):
    """Test label arithmetic"""

    def test_text(self):
        """Labels are dot-joined"""
        self.assertEqual(proptutor.parse_label('2.1'), (2, 1))
        self.assertEqual(proptutor.format_label((2, 1)), '2.1')
        self.assertEqual(proptutor.format_label(None), '')
        for text in ('0', '1.0', 'a', '', '1..2'):
            with self.assertRaises(ValueError, msg=repr(text)):
                proptutor.parse_label(text)

    def test_less(self):
        """Subproof lines come before the line they justify"""
        less = proptutor.label_less
        self.assertTrue(less((1,), (2,)))
        self.assertTrue(less((1, 3), (1,)), "1.3 comes before 1")
        self.assertFalse(less((1,), (1, 3)))
        self.assertTrue(less((2, 1), (2, 2)))
        self.assertTrue(less((1,), (2, 1)))
        self.assertFalse(less((2,), (2,)))

    def test_add_before(self):
        """Inserting lines shifts exactly the lines after them"""
        add = proptutor.label_add_before
        self.assertEqual(add((2,), (2,), 1), (3,), "pos itself moves")
        self.assertEqual(add((1,), (2,), 1), (1,), "earlier lines stay")
        self.assertEqual(add((2, 1), (2,), 1), (3, 1),
                         "a subproof moves with its line")
        self.assertEqual(add((2, 2), (2, 1), 1), (2, 3))
        self.assertEqual(add((2,), (2, 1), 1), (2,),
                         "the line closing the subproof stays")
        self.assertEqual(add((3, 1), (2, 2), 1), (3, 1),
                         "other subproofs stay")
        self.assertEqual(add((3,), (2, 2), 2), (3,))
        self.assertEqual(add((2, 3), (2, 2), -1), (2, 2), "deletion")

    def test_scope(self):
        """Earlier siblings and their ancestors' siblings are visible"""
        scope = proptutor.label_in_scope
        self.assertTrue(scope((1,), (2,)))
        self.assertTrue(scope((1,), (2, 2, 2)))
        self.assertTrue(scope((2, 1), (2, 2)))
        self.assertFalse(scope((2,), (2, 1)), "a subproof can't cite its line")
        self.assertFalse(scope((2, 1), (3,)), "closed subproofs are hidden")
        self.assertFalse(scope((3,), (2,)), "later lines are hidden")
        self.assertTrue(proptutor.label_within((2, 1), (2,)))
        self.assertFalse(proptutor.label_within((2,), (2,)))

class TestEquivalences(unittest.TestCase):
    """Test the equivalence rules"""

    def check(self, rule, before, after, version=EquivVersion.UNKNOWN):
        """The rule rewrites ``before`` into ``after`` at the root,
        and back again if it is reversible.
        """
        ltr = Equivalence(rule)
        prop = parse(before)
        self.assertTrue(ltr.matches_at(prop), f'{rule.name} should match {before}')
        self.assertEqual(ltr.apply_at(prop), parse(after),
                         f'{rule.name} on {before}')
        rtl = Equivalence(rule, False, version)
        if rule in (EquivRule.DOMINATION, EquivRule.ABSORPTION,
                    EquivRule.NEGATION):
            self.assertFalse(rtl.matches_at(parse(after)),
                             f'{rule.name} is irreversible')
            with self.assertRaises(proptutor.RuleError):
                rtl.apply_at(parse(after))
        else:
            self.assertTrue(rtl.matches_at(parse(after)))
            self.assertEqual(rtl.apply_at(parse(after)), prop,
                             f'{rule.name} right-to-left on {after}')

    def test_laws(self):
        """Every law, both ways where possible"""
        self.check(EquivRule.IDENTITY, 'P and T', 'P', EquivVersion.AND)
        self.check(EquivRule.IDENTITY, 'P or F', 'P', EquivVersion.OR)
        self.check(EquivRule.DOMINATION, 'P or T', 'T')
        self.check(EquivRule.DOMINATION, 'P and F', 'F')
        self.check(EquivRule.IDEMPOTENCY, 'Q or Q', 'Q', EquivVersion.OR)
        self.check(EquivRule.COMMUTATIVITY, 'P and Q', 'Q and P')
        self.check(EquivRule.ASSOCIATIVITY, '(P and Q) and R', 'P and (Q and R)')
        self.check(EquivRule.DISTRIBUTIVITY, 'P and (Q or R)',
                   '(P and Q) or (P and R)')
        self.check(EquivRule.DISTRIBUTIVITY, 'P or (Q and R)',
                   '(P or Q) and (P or R)')
        self.check(EquivRule.ABSORPTION, 'P or (P and Q)', 'P')
        self.check(EquivRule.NEGATION, 'P and not P', 'F')
        self.check(EquivRule.NEGATION, 'P or not P', 'T')
        self.check(EquivRule.DE_MORGAN, 'not (P and Q)', 'not P or not Q')
        self.check(EquivRule.DE_MORGAN, 'not (P or Q)', 'not P and not Q')
        self.check(EquivRule.DOUBLE_NEGATION, 'not not P', 'P')
        self.check(EquivRule.LAW_OF_IMPLICATION, 'P implies Q', 'not P or Q')
        self.check(EquivRule.CONTRAPOSITIVE, 'P implies Q',
                   'not Q implies not P')

    def test_identity(self):
        """Identity needs a version to go right to left"""
        equiv = Equivalence(EquivRule.IDENTITY)
        self.assertEqual(equiv.match_count(parse('P and T')), 1)
        self.assertEqual(equiv.apply_all(parse('P and T')), P)
        rtl = Equivalence(EquivRule.IDENTITY, False)
        self.assertTrue(rtl.has_version())
        self.assertFalse(rtl.is_complete(), "version is still unknown")
        self.assertEqual(rtl.match_count(P), 0)
        rtl = Equivalence(EquivRule.IDENTITY, False, EquivVersion.AND)
        self.assertTrue(rtl.is_complete())
        self.assertEqual(rtl.apply_all(P), proptutor.conjunction(P, proptutor.TRUE))
        self.assertFalse(Equivalence().is_complete(), "no rule chosen")

    def test_matches(self):
        """Matches are listed root first, then left before right"""
        equiv = Equivalence(EquivRule.DOUBLE_NEGATION)
        prop = parse('not not not not P')
        matches = equiv.matches(prop)
        self.assertEqual(len(matches), 3)
        self.assertIs(matches[0], prop)
        self.assertIs(matches[1], prop.arg)
        self.assertIs(matches[2], prop.arg.arg)
        prop = parse('not not P and not not Q')
        self.assertEqual(equiv.matches(prop), [prop.left, prop.right])

    def test_apply_once(self):
        """Only the chosen match is rewritten"""
        equiv = Equivalence(EquivRule.DOUBLE_NEGATION)
        prop = parse('not not P and not not Q')
        self.assertEqual(equiv.apply_once(prop, 1), parse('not not P and Q'))
        self.assertEqual(equiv.apply_once(prop, 1).left, prop.left,
                         "the first match must be untouched")
        self.assertEqual(equiv.apply_once(prop, 0), parse('P and not not Q'))
        self.assertEqual(equiv.apply_once(prop, 5), prop,
                         "out of range rewrites nothing")
        self.assertEqual(equiv.apply_all(prop), parse('P and Q'))
        nested = parse('not not not not P')
        self.assertEqual(equiv.apply_once(nested, 1), parse('not not P'),
                         "second match is the inner triple negation")

    def test_inverse_everywhere(self):
        """Every rewrite can be undone at the place it happened"""
        props = [parse(text) for text in (
            'not not (P and T) or (Q or Q)',
            '(P and Q) and (R and (P and Q))',
            'not (P or Q) implies (P and (Q or R))',
            '(P or F) and not (Q and R)',
            'P implies not not Q',
        )]
        for rule in EquivRule:
            if rule is EquivRule.UNKNOWN or rule in IRREVERSIBLE:
                continue
            ltr = Equivalence(rule)
            checked = 0
            for prop in props:
                for i, match in enumerate(ltr.matches(prop)):
                    version = EquivVersion.UNKNOWN
                    if rule in (EquivRule.IDENTITY, EquivRule.IDEMPOTENCY):
                        version = EquivVersion[match.kind.name]
                    rtl = Equivalence(rule, False, version)
                    result = ltr.apply_once(prop, i)
                    undone = [rtl.apply_once(result, j)
                              for j in range(rtl.match_count(result))]
                    self.assertIn(prop, undone,
                                  f'{rule.name} #{i} on {prop} is not undone')
                    checked += 1
            self.assertGreater(checked, 0, f'no match for {rule.name}')

    def test_no_match(self):
        """Applying a rule with no matches changes nothing"""
        prop = parse('P and (Q implies R)')
        for rule in (EquivRule.DE_MORGAN, EquivRule.IDENTITY,
                     EquivRule.ASSOCIATIVITY):
            equiv = Equivalence(rule)
            self.assertEqual(equiv.match_count(prop), 0, rule.name)
            self.assertEqual(equiv.apply_all(prop), prop, rule.name)

    def test_names(self):
        """Display names"""
        self.assertEqual(Equivalence(EquivRule.DE_MORGAN).name(), 'De Morgan')
        self.assertEqual(Equivalence().name(), 'Choose')

class TestInferences(unittest.TestCase):
    """Test the inference rules"""

    def test_intro_and(self):
        """Intro ∧ both ways"""
        back = Inference(InferRule.INTRO_AND, forward=False)
        self.assertTrue(back.matches([proptutor.conjunction(P, Q)]))
        self.assertEqual(back.apply_backward([proptutor.conjunction(P, Q)]),
                         [P, Q], "wrong order")
        fwd = Inference(InferRule.INTRO_AND)
        self.assertEqual(fwd.apply_forward([P, Q]), proptutor.conjunction(P, Q))

    def test_arity(self):
        """Argument counts by rule and direction"""
        for rule, ((fin, fout), (bin_, bout)) in ARITY.items():
            fwd = Inference(rule, True)
            back = Inference(rule, False)
            self.assertEqual((fwd.num_inputs(), fwd.num_outputs()), (fin, fout))
            self.assertEqual((back.num_inputs(), back.num_outputs()),
                             (bin_, bout))
            self.assertEqual(fwd.num_args(), fin, rule.name)
            self.assertEqual(back.num_args(), bout, rule.name)
        back = Inference(InferRule.INTRO_OR, False)
        self.assertEqual((back.num_inputs(), back.num_outputs()), (1, 1),
                         "Intro ∨ backward needs the disjunction, gives one side")

    def test_unsupported(self):
        """Unimplemented directions are rejected"""
        self.assertEqual(UNSUPPORTED, {
            (InferRule.DIRECT_PROOF, True), (InferRule.ASSUMPTION, True),
            (InferRule.INTRO_OR, True), (InferRule.MODUS_PONENS, False),
            (InferRule.ELIM_OR, False)})
        for rule, forward in UNSUPPORTED:
            infer = Inference(rule, forward)
            self.assertFalse(infer.is_supported())
            with self.assertRaisesRegex(proptutor.RuleError, 'not allowed'):
                infer.matches([P])
        with self.assertRaises(proptutor.RuleError):
            Inference(InferRule.MODUS_PONENS, False).apply_backward([Q])
        with self.assertRaises(proptutor.RuleError):
            Inference().matches([P])

    def test_versions(self):
        """Elim ∧ forward and Intro ∨ backward choose a side"""
        elim = Inference(InferRule.ELIM_AND)
        self.assertTrue(elim.has_version())
        self.assertFalse(elim.is_complete())
        elim = Inference(InferRule.ELIM_AND, version=InferVersion.FIRST)
        self.assertTrue(elim.is_complete())
        self.assertEqual(elim.apply_forward([proptutor.conjunction(P, Q)]), P)
        intro = Inference(InferRule.INTRO_OR, False, InferVersion.SECOND)
        self.assertTrue(intro.has_version())
        self.assertTrue(intro.matches([proptutor.disjunction(P, Q)]))
        self.assertFalse(intro.matches([proptutor.conjunction(P, Q)]))
        self.assertEqual(intro.apply_backward([proptutor.disjunction(P, Q)]), [Q])
        self.assertFalse(Inference(InferRule.INTRO_AND).has_version())

    def test_forward_rules(self):
        """Modus ponens and Elim ∨"""
        mp = Inference(InferRule.MODUS_PONENS)
        self.assertTrue(mp.matches([P, proptutor.implication(P, Q)]))
        self.assertFalse(mp.matches([Q, proptutor.implication(P, Q)]),
                         "antecedent must match")
        self.assertFalse(mp.matches([P, proptutor.conjunction(P, Q)]))
        self.assertEqual(mp.apply_forward([P, proptutor.implication(P, Q)]), Q)
        elim = Inference(InferRule.ELIM_OR)
        args = [proptutor.disjunction(P, Q), proptutor.Negation(P)]
        self.assertTrue(elim.matches(args))
        self.assertEqual(elim.apply_forward(args), Q)
        self.assertFalse(elim.matches([proptutor.disjunction(P, Q),
                                       proptutor.Negation(Q)]))

    def test_backward_rules(self):
        """Direct proof and assumption"""
        dp = Inference(InferRule.DIRECT_PROOF, False)
        self.assertTrue(dp.matches([proptutor.implication(P, Q)]))
        self.assertFalse(dp.matches([P]))
        self.assertEqual(dp.apply_backward([proptutor.implication(P, Q)]), [P, Q])
        self.assertEqual(assumption().apply_backward([P]), [])

    def test_equivalence(self):
        """Equivalence delegates to its law"""
        infer = Inference(InferRule.EQUIVALENCE)
        self.assertEqual(infer.equiv, Equivalence(), "a blank law is attached")
        self.assertFalse(infer.is_complete())
        self.assertIsNone(Inference(InferRule.MODUS_PONENS,
                                    equiv=Equivalence(EquivRule.DE_MORGAN)).equiv,
                          "only Equivalence keeps a law")
        infer = Inference(InferRule.EQUIVALENCE,
                          equiv=Equivalence(EquivRule.DOUBLE_NEGATION),
                          match_number=1)
        prop = parse('not not P and not not Q')
        self.assertTrue(infer.matches([prop]))
        self.assertEqual(infer.apply_forward([prop]), parse('not not P and Q'))
        self.assertEqual(infer.name(), 'Double Negation')
        infer = Inference(InferRule.EQUIVALENCE,
                          equiv=Equivalence(EquivRule.DOUBLE_NEGATION),
                          match_number=2)
        self.assertFalse(infer.matches([prop]), "only two matches")

class TestLine(unittest.TestCase):
    """Test the argument slots of proof lines"""

    def test_resize(self):
        """Argument slots always match the rule's arity"""
        line = proptutor.Line(P, Inference(InferRule.INTRO_AND))
        self.assertEqual(line.args, [None, None])
        line.args = [(1,), (2,)]
        back = line.with_forward(False)
        self.assertEqual(back.args, [(1,), (2,)], "Intro ∧ backward gives 2")
        elim = back.with_rule(InferRule.ELIM_AND)
        self.assertEqual(elim.args, [(1,)], "Elim ∧ backward gives 1")
        self.assertEqual(elim.with_forward(True).args, [(1,)])
        self.assertEqual(line.args, [(1,), (2,)], "copies don't share args")
        self.assertEqual(line.with_rule(InferRule.UNKNOWN).args, [])

    def test_complete(self):
        """Forward lines need every argument"""
        line = proptutor.Line(P, Inference(InferRule.INTRO_AND), args=[(1,), None])
        self.assertFalse(line.is_complete())
        line.args = [(1,)]
        with self.assertRaises(proptutor.InvariantViolation):
            line.is_complete()

class TestProof(LabelOrderMixin, unittest.TestCase):
    """Test the natural-deduction editor"""

    def test_bootstrap(self):
        """The default proof has two lines"""
        state = ProofState.bootstrap()
        self.assertEqual(state.labels, ((1,), (2,)))
        first, second = state.lines
        self.assertEqual(first.prop, parse('P implies Q implies R'))
        self.assertIs(first.rule, InferRule.ASSUMPTION)
        self.assertTrue(first.fixed)
        self.assertFalse(first.editable)
        self.assertTrue(state.is_correct(0), "the premise is assumed")
        self.assertEqual(second.prop, parse('Q implies P implies R'))
        self.assertIs(second.rule, InferRule.UNKNOWN)
        self.assertFalse(second.forward)
        self.assertTrue(second.fixed)
        self.assertTrue(second.editable)
        self.assertFalse(second.is_complete())
        self.assertFalse(state.is_finished())

    def test_direct_proof(self):
        """Direct proof opens a subproof"""
        state = proptutor.apply_edit(ProofState.bootstrap(),
                                     proptutor.SetRule(1, InferRule.DIRECT_PROOF))
        self.assertEqual(state.labels, ((1,), (2, 1), (2, 2), (2,)))
        self.assertEqual(state.lines[1].prop, Q)
        self.assertIs(state.lines[1].rule, InferRule.ASSUMPTION)
        self.assertEqual(state.lines[2].prop, proptutor.implication(P, R))
        self.assertIs(state.lines[2].rule, InferRule.UNKNOWN)
        self.assertFalse(state.lines[2].forward)
        self.assertEqual(state.lines[3].args, [(2, 1), (2, 2)])
        self.assertTrue(state.is_correct(3))
        self.assertFalse(state.is_finished())
        self.assertLabelsOrdered(state)

    def test_whole_proof(self):
        """Prove Q → P → R from P → Q → R"""
        edit = proptutor.apply_edit
        state = ProofState.bootstrap()
        state = edit(state, proptutor.SetRule(1, InferRule.DIRECT_PROOF))
        state = edit(state, proptutor.SetRule(2, InferRule.DIRECT_PROOF))
        self.assertEqual(state.labels, ((1,), (2, 1), (2, 2, 1), (2, 2, 2),
                                        (2, 2), (2,)))
        self.assertEqual(state.lines[3].prop, R)

        # R from P and the premise gives Q → R first
        state = edit(state, proptutor.SetDirection(3))
        self.assertTrue(state.lines[3].forward)
        state = edit(state, proptutor.SetRule(3, InferRule.MODUS_PONENS))
        state = edit(state, proptutor.SetArgument(3, 0, (2, 2, 1)))
        self.assertEqual(len(state.lines), 6, "incomplete: nothing inserted")
        state = edit(state, proptutor.SetArgument(3, 1, (1,)))
        self.assertEqual(state.labels, ((1,), (2, 1), (2, 2, 1), (2, 2, 2),
                                        (2, 2, 3), (2, 2), (2,)))
        self.assertEqual(state.lines[3].prop, proptutor.implication(Q, R))
        self.assertFalse(state.lines[3].fixed, "derived lines can be deleted")
        self.assertTrue(state.is_correct(3))
        self.assertEqual(state.lines[4].prop, R)
        self.assertIs(state.lines[4].rule, InferRule.UNKNOWN,
                      "the old rule no longer applies")
        self.assertEqual(state.lines[5].args, [(2, 2, 1), (2, 2, 3)],
                         "arguments follow the shifted labels")
        self.assertLabelsOrdered(state)

        state = edit(state, proptutor.SetRule(4, InferRule.MODUS_PONENS))
        state = edit(state, proptutor.SetArgument(4, 0, (2, 1)))
        state = edit(state, proptutor.SetArgument(4, 1, (2, 2, 2)))
        self.assertEqual(len(state.lines), 7, "R was already there")
        self.assertTrue(state.is_finished())
        self.assertArgsResolve(state)
        self.assertIsNone(proptutor.ProofRunner(state).validate())

        # deleting Q → R leaves R without its argument
        state = edit(state, proptutor.DeleteLine(3))
        self.assertEqual(state.labels, ((1,), (2, 1), (2, 2, 1), (2, 2, 2),
                                        (2, 2), (2,)))
        self.assertEqual(state.lines[3].args, [(2, 1), None])
        self.assertEqual(state.lines[4].args, [(2, 2, 1), (2, 2, 2)])
        self.assertFalse(state.is_finished())
        self.assertArgsResolve(state)

    def test_backward_placeholders(self):
        """Backward rules insert the lines they need"""
        edit = proptutor.apply_edit
        state = ProofState.bootstrap('P and Q', 'Q and P')
        state = edit(state, proptutor.SetRule(1, InferRule.INTRO_AND))
        self.assertEqual(state.labels, ((1,), (2,), (3,), (4,)))
        self.assertEqual([line.prop for line in state.lines],
                         [parse('P and Q'), Q, P, parse('Q and P')])
        self.assertEqual(state.lines[3].args, [(2,), (3,)])
        self.assertTrue(state.is_correct(3))
        for index, version in ((1, InferVersion.SECOND),
                               (2, InferVersion.FIRST)):
            state = edit(state, proptutor.SetDirection(index))
            state = edit(state, proptutor.SetRule(index, InferRule.ELIM_AND))
            state = edit(state, proptutor.SetVersion(index, version))
            state = edit(state, proptutor.SetArgument(index, 0, (1,)))
        self.assertEqual(len(state.lines), 4)
        self.assertTrue(state.is_finished())
        self.assertEqual(list(proptutor.ProofRunner().mistakes(state)), [])

    def test_backward_reuse(self):
        """Backward rules cite an existing line when they can"""
        edit = proptutor.apply_edit
        state = ProofState.bootstrap('not not P', 'P')
        state = edit(state, proptutor.SetRule(1, InferRule.EQUIVALENCE))
        state = edit(state, proptutor.SetEquivRule(1, EquivRule.DOUBLE_NEGATION))
        self.assertEqual(len(state.lines), 2, "P has no double negation")
        state = edit(state, proptutor.SetLeftToRight(1, False))
        self.assertEqual(len(state.lines), 2, "not not P was reused")
        self.assertEqual(state.lines[1].args, [(1,)])
        self.assertTrue(state.is_finished())

    def test_replace_in_place(self):
        """A derived line changes when its rule does"""
        edit = proptutor.apply_edit
        state = ProofState.bootstrap('P and Q', 'Q')
        state = edit(state, proptutor.SetDirection(1))
        state = edit(state, proptutor.SetRule(1, InferRule.ELIM_AND))
        state = edit(state, proptutor.SetVersion(1, InferVersion.FIRST))
        state = edit(state, proptutor.SetArgument(1, 0, (1,)))
        self.assertEqual(state.labels, ((1,), (2,), (3,)))
        self.assertEqual(state.lines[1].prop, P)
        self.assertEqual(state.lines[2].prop, Q)
        self.assertIs(state.lines[2].rule, InferRule.UNKNOWN)
        state = edit(state, proptutor.SetVersion(1, InferVersion.SECOND))
        self.assertEqual(len(state.lines), 3, "replaced, not inserted")
        self.assertEqual(state.lines[1].prop, Q)
        self.assertTrue(state.is_correct(1))

    def test_prune(self):
        """Abandoned subproofs disappear"""
        edit = proptutor.apply_edit
        state = edit(ProofState.bootstrap(),
                     proptutor.SetRule(1, InferRule.DIRECT_PROOF))
        state = edit(state, proptutor.SetRule(3, InferRule.UNKNOWN))
        self.assertEqual(state.labels, ((1,), (2,)))
        self.assertEqual(state.lines[1].args, [])

    def test_prune_arguments(self):
        """Arguments into an abandoned subproof are unset"""
        edit = proptutor.apply_edit
        state = edit(ProofState.bootstrap(),
                     proptutor.SetRule(1, InferRule.DIRECT_PROOF))
        for rule in (InferRule.INTRO_AND, InferRule.INTRO_OR):
            changed = edit(state, proptutor.SetRule(3, rule))
            self.assertEqual(changed.labels, ((1,), (2,)))
            self.assertEqual(changed.lines[1].args,
                             [None] * changed.lines[1].infer.num_args())
            self.assertArgsResolve(changed)
            reloaded = proptutor.loads(proptutor.dumps(changed))
            self.assertEqual(reloaded.labels, changed.labels)

    def test_shared_subterms(self):
        """Lines built from the same subterm stay independent"""
        edit = proptutor.apply_edit
        state = ProofState.bootstrap('P', 'Q')
        state = edit(state, proptutor.SetRule(1, InferRule.EQUIVALENCE))
        state = edit(state, proptutor.SetEquivRule(1, EquivRule.IDEMPOTENCY))
        state = edit(state, proptutor.SetLeftToRight(1, False))
        state = edit(state, proptutor.SetEquivVersion(1, EquivVersion.AND))
        self.assertEqual([line.prop for line in state.lines],
                         [P, parse('Q and Q'), Q])
        state = edit(state, proptutor.SetRule(1, InferRule.INTRO_AND))
        self.assertEqual([line.prop for line in state.lines],
                         [P, Q, parse('Q and Q'), Q],
                         "both conjuncts cite the same line")
        self.assertEqual(state.lines[2].args, [(2,), (2,)])
        self.assertTrue(state.is_correct(2))
        state = edit(state, proptutor.SetRule(1, InferRule.ASSUMPTION))
        self.assertEqual(len(state.lines), 4,
                         "justifying Q removed lines it did not generate")
        self.assertEqual(state.lines[3].args, [(3,)])
        self.assertTrue(state.is_correct(3))
        self.assertLabelsOrdered(state)
        self.assertArgsResolve(state)

    def test_refused(self):
        """Line flags limit what can be edited"""
        edit = proptutor.apply_edit
        state = ProofState.bootstrap()
        with self.assertRaises(proptutor.EditRefused):
            edit(state, proptutor.DeleteLine(0))
        with self.assertRaises(proptutor.EditRefused):
            edit(state, proptutor.SetRule(0, InferRule.INTRO_AND))
        with self.assertRaises(proptutor.EditRefused):
            edit(state, proptutor.SetDirection(0))
        with self.assertRaises(proptutor.EditRefused):
            edit(state, proptutor.SetArgument(1, 0, (1,)))
        with self.assertRaises(proptutor.EditRefused):
            edit(state, proptutor.SetEquivRule(1, EquivRule.IDENTITY))
        with self.assertRaises(proptutor.EditRefused):
            edit(state, proptutor.SetRule(5, InferRule.INTRO_AND))
        state = edit(state, proptutor.SetDirection(1))
        state = edit(state, proptutor.SetRule(1, InferRule.INTRO_AND))
        with self.assertRaises(proptutor.EditRefused, msg="line 2 can't see 2"):
            edit(state, proptutor.SetArgument(1, 0, (2,)))

    def test_direction(self):
        """Direct proof only works backward"""
        edit = proptutor.apply_edit
        state = edit(ProofState.bootstrap(),
                     proptutor.SetRule(1, InferRule.DIRECT_PROOF))
        state = edit(state, proptutor.SetDirection(3))
        self.assertIs(state.lines[-1].rule, InferRule.UNKNOWN)
        self.assertTrue(state.lines[-1].forward)
        self.assertEqual(state.labels, ((1,), (2,)), "the subproof is gone")

    def test_unsupported_waits(self):
        """Unsupported directions are stored without being applied"""
        edit = proptutor.apply_edit
        state = ProofState.bootstrap('P implies Q', 'Q')
        state = edit(state, proptutor.SetRule(1, InferRule.MODUS_PONENS))
        self.assertEqual(len(state.lines), 2)
        self.assertFalse(state.is_correct(1))

    def test_toggle_editing(self):
        """Editing only changes how a line is shown"""
        state = proptutor.apply_edit(ProofState.bootstrap(),
                                     proptutor.ToggleEditing(0))
        self.assertTrue(state.lines[0].editing)
        self.assertFalse(ProofState.bootstrap().lines[0].editing)

    def test_rows(self):
        """Rows summarize lines for display"""
        state = proptutor.apply_edit(ProofState.bootstrap(),
                                     proptutor.SetRule(1, InferRule.DIRECT_PROOF))
        rows = state.rows()
        self.assertEqual([row.label for row in rows], ['1', '2.1', '2.2', '2'])
        self.assertEqual(rows[0].prop, 'P → Q → R')
        self.assertEqual(rows[3].rule, 'Direct Proof')
        self.assertEqual(rows[3].args, ('2.1', '2.2'))
        self.assertTrue(rows[3].correct)
        self.assertFalse(rows[2].complete)
        self.assertEqual(rows[3].depth, 1)
        self.assertEqual(rows[2].depth, 2)

class TestChain(unittest.TestCase):
    """Test the equivalence-chain editor"""

    def test_bootstrap(self):
        """A new chain holds only the goal"""
        state = ChainState.bootstrap()
        self.assertEqual(len(state.lines), 1)
        self.assertEqual(state.lines[0].prop, parse('Q implies P implies R'))
        self.assertFalse(state.lines[0].equiv.is_complete())
        self.assertFalse(state.is_finished())

    def test_forward(self):
        """Forward laws insert, fill in and replace"""
        edit = proptutor.apply_chain_edit
        state = ChainState.bootstrap('not not P and Q', 'Q and P')
        state = edit(state, proptutor.SetLaw(0, EquivRule.DOUBLE_NEGATION))
        self.assertEqual(len(state.lines), 2)
        self.assertEqual(state.lines[0].prop, parse('P and Q'))
        self.assertIs(state.lines[0].gen_from, state.start)
        self.assertIs(state.lines[1].equiv.rule, EquivRule.UNKNOWN)
        self.assertEqual(state.rows()[0].prop, '[¬¬P] ∧ Q')

        replaced = edit(state, proptutor.SetLaw(0, EquivRule.COMMUTATIVITY))
        self.assertEqual(len(replaced.lines), 2, "replaced, not inserted")
        self.assertEqual(replaced.lines[0].prop, parse('Q and not not P'))

        state = edit(state, proptutor.SetLaw(1, EquivRule.COMMUTATIVITY))
        self.assertEqual(len(state.lines), 2, "Q and P was already there")
        self.assertIs(state.lines[1].gen_from, state.lines[0].prop)
        self.assertTrue(state.is_finished())

        state = edit(state, proptutor.DeleteChainLine(0))
        self.assertEqual(len(state.lines), 1)
        self.assertIsNone(state.lines[0].gen_from, "link to deleted line kept")
        with self.assertRaises(proptutor.EditRefused):
            edit(state, proptutor.DeleteChainLine(0))

    def test_backward(self):
        """Backward laws rewrite the line itself"""
        edit = proptutor.apply_chain_edit
        state = ChainState.bootstrap('P', 'not not not not P')
        state = edit(state, proptutor.ToggleChainDirection(0))
        self.assertFalse(state.lines[0].forward)
        state = edit(state, proptutor.SetLaw(0, EquivRule.DOUBLE_NEGATION))
        self.assertEqual(len(state.lines), 2)
        self.assertEqual(state.lines[0].prop, parse('not not P'))
        self.assertFalse(state.lines[0].forward)
        self.assertIs(state.lines[0].gen_from, state.lines[1].prop)
        self.assertTrue(state.is_correct(1))
        self.assertEqual(state.rows()[2].prop, '¬{¬{¬¬P}}',
                         "every strict match is marked")
        state = edit(state, proptutor.SetLaw(0, EquivRule.DOUBLE_NEGATION))
        self.assertEqual(len(state.lines), 2)
        self.assertTrue(state.is_finished())

    def test_match_number(self):
        """A chosen match rewrites only that occurrence"""
        edit = proptutor.apply_chain_edit
        state = ChainState.bootstrap('not not P and not not Q',
                                     'P and not not Q')
        state = edit(state, proptutor.SetLawMatch(0, 0))
        self.assertEqual(state.lines[0].match_number, 0)
        state = edit(state, proptutor.SetLaw(0, EquivRule.DOUBLE_NEGATION))
        self.assertEqual(len(state.lines), 1)
        self.assertTrue(state.is_finished())
        self.assertEqual(state.rows()[0].prop, '[¬¬P] ∧ ¬¬Q')
        self.assertEqual(state.rows()[1].match_count, 2)

    def test_versions(self):
        """Right-to-left Identity waits for a version"""
        edit = proptutor.apply_chain_edit
        state = ChainState.bootstrap('P', 'P or F')
        state = edit(state, proptutor.SetLaw(0, EquivRule.IDENTITY))
        state = edit(state, proptutor.SetLawDirection(0, False))
        self.assertFalse(state.is_correct(0))
        state = edit(state, proptutor.SetLawVersion(0, EquivVersion.OR))
        self.assertEqual(len(state.lines), 1)
        self.assertTrue(state.is_finished())

    def test_toggle_editing(self):
        state = proptutor.apply_chain_edit(ChainState.bootstrap(),
                                           proptutor.ToggleChainEditing(0))
        self.assertTrue(state.lines[0].editable)

class TestSnapshot(unittest.TestCase):
    """Test saving and loading states"""

    def test_proof_format(self):
        """Tree snapshots list lines and dot-joined labels"""
        state = proptutor.apply_edit(ProofState.bootstrap(),
                                     proptutor.SetRule(1, InferRule.DIRECT_PROOF))
        data = proptutor.encode_proof(state)
        self.assertEqual(data['startProp'], 'P implies Q implies R')
        self.assertEqual(data['endProp'], 'Q implies P implies R')
        self.assertEqual(data['labels'], ['1', '2.1', '2.2', '2'])
        self.assertEqual(data['lines'][3]['args'], ['2.1', '2.2'])
        self.assertEqual(data['lines'][3]['rule'], 1)
        self.assertEqual(data['lines'][0]['rule'], 8)
        self.assertNotIn('equiv', data['lines'][0])
        copy = proptutor.decode_proof(json.loads(json.dumps(data)))
        self.assertEqual(copy.labels, state.labels)
        self.assertEqual([line.prop for line in copy.lines],
                         [line.prop for line in state.lines])
        self.assertEqual([line.infer for line in copy.lines],
                         [line.infer for line in state.lines])
        self.assertEqual([line.args for line in copy.lines],
                         [line.args for line in state.lines])

    def test_equivalence_lines(self):
        """Equivalence lines keep their law"""
        edit = proptutor.apply_edit
        state = ProofState.bootstrap('not not P', 'P')
        state = edit(state, proptutor.SetRule(1, InferRule.EQUIVALENCE))
        state = edit(state, proptutor.SetEquivRule(1, EquivRule.DOUBLE_NEGATION))
        state = edit(state, proptutor.SetLeftToRight(1, False))
        line = proptutor.encode_proof(state)['lines'][1]
        self.assertEqual(line['equiv'], 10)
        self.assertFalse(line['leftToRight'])
        self.assertEqual(line['matchNumber'], -1)
        copy = proptutor.loads(proptutor.dumps(state))
        self.assertEqual(copy.lines[1].infer.equiv,
                         Equivalence(EquivRule.DOUBLE_NEGATION, False))
        self.assertTrue(copy.is_finished())

    def test_chain(self):
        """Chain snapshots have no labels"""
        state = ChainState.bootstrap('P', 'Q')
        state = proptutor.apply_chain_edit(state, proptutor.SetLawMatch(0, 1))
        data = proptutor.encode_chain(state)
        self.assertEqual(data['startProp'], 'P')
        self.assertEqual(data['endProp'], 'Q')
        self.assertNotIn('labels', data)
        self.assertEqual(data['lines'], [{
            'prop': 'Q', 'rule': 0, 'leftToRight': True, 'version': 0,
            'matchNumber': 1, 'forward': True}])
        copy = proptutor.loads(proptutor.dumps(state), chain=True)
        self.assertEqual(copy.end, Q)
        self.assertEqual(copy.lines[0].match_number, 1)

    def test_defaults(self):
        """Missing or partial snapshots start over"""
        state = proptutor.loads('')
        self.assertEqual(state.labels, ((1,), (2,)))
        state = proptutor.decode_proof({'startProp': 'P', 'endProp': 'Q',
                                        'lines': [{'prop': 'P', 'rule': 8}]})
        self.assertEqual(state.labels, ((1,), (2,)), "no labels")
        self.assertEqual(state.lines[1].prop, Q)
        chain = proptutor.loads(None, chain=True)
        self.assertEqual(len(chain.lines), 1)

    def test_repairs(self):
        """Argument lists are fitted to the rule"""
        data = {'startProp': 'P', 'endProp': 'Q',
                'lines': [{'prop': 'P', 'rule': 8, 'forward': False},
                          {'prop': 'Q', 'rule': 3, 'forward': True,
                           'args': ['1']},
                          {'prop': 'P', 'rule': 8, 'forward': False}],
                'labels': ['1', '2']}
        with self.assertLogs('proptutor.snapshot', 'WARNING'):
            state = proptutor.decode_proof(data)
        self.assertEqual(len(state.lines), 2, "extra lines dropped")
        self.assertEqual(state.lines[1].args, [(1,), None])

    def test_errors(self):
        """Malformed snapshots raise SnapshotError"""
        good = {'prop': 'P', 'rule': 8, 'forward': False}
        bad = [
            {'startProp': 'P and'},
            {'lines': [dict(good, rule=99)], 'labels': ['1']},
            {'lines': [dict(good, prop='P Q')], 'labels': ['1']},
            {'lines': [good, good], 'labels': ['2', '1']},
            {'lines': [good], 'labels': ['x']},
            {'lines': [{'prop': 'Q', 'rule': 4, 'version': 1,
                        'args': ['7']}], 'labels': ['1']},
        ]
        for data in bad:
            with self.assertRaises(proptutor.SnapshotError, msg=repr(data)):
                proptutor.decode_proof(data)
        for text in ('not json', '[]'):
            with self.assertRaises(proptutor.SnapshotError, msg=text):
                proptutor.loads(text)

class TestEditor(unittest.TestCase):
    """Test the host objects"""

    def test_proof(self):
        """Successful edits are published, failed ones are not"""
        snapshots = []
        proof = proptutor.Proof(on_change=snapshots.append)
        proof.apply(proptutor.SetRule(1, InferRule.DIRECT_PROOF))
        self.assertEqual(len(snapshots), 1)
        self.assertEqual(json.loads(snapshots[0])['labels'],
                         ['1', '2.1', '2.2', '2'])
        with self.assertRaises(proptutor.EditRefused):
            proof.apply(proptutor.DeleteLine(0))
        self.assertEqual(len(snapshots), 1, "a failed edit was published")
        self.assertEqual(len(proof.state.lines), 4, "state changed anyway")
        again = proptutor.Proof(proof.snapshot())
        self.assertEqual(again.state.labels, proof.state.labels)
        self.assertFalse(again.is_finished())
        self.assertEqual(len(again.rows()), 4)

    def test_chain(self):
        """Chains are hosted the same way"""
        snapshots = []
        chain = proptutor.Chain(json.dumps({'startProp': 'P and Q',
                                            'endProp': 'Q and P'}),
                                on_change=snapshots.append)
        chain.apply(proptutor.SetLaw(0, EquivRule.COMMUTATIVITY))
        self.assertTrue(chain.is_finished())
        self.assertEqual(json.loads(snapshots[-1])['lines'][0]['rule'], 4)
        with self.assertRaises(proptutor.EditRefused):
            chain.apply(proptutor.DeleteChainLine(0))
        self.assertEqual(len(snapshots), 1)

class TestRunner(unittest.TestCase):
    """Test whole-proof validation"""

    def proof(self, last_args=((3,), (2,)), end='Q and P'):
        """Q ∧ P from P ∧ Q, written forward"""
        Line = proptutor.Line
        pq = parse('P and Q')
        lines = [
            Line(pq, assumption(), fixed=True, editable=False),
            Line(P, Inference(InferRule.ELIM_AND, version=InferVersion.FIRST),
                 args=[(1,)]),
            Line(Q, Inference(InferRule.ELIM_AND, version=InferVersion.SECOND),
                 args=[(1,)]),
            Line(parse('Q and P'), Inference(InferRule.INTRO_AND),
                 args=list(last_args)),
        ]
        return ProofState(pq, parse(end), [(1,), (2,), (3,), (4,)], lines)

    def test_valid(self):
        """A correct proof passes"""
        state = self.proof()
        self.assertTrue(state.is_finished())
        self.assertIsNone(proptutor.ProofRunner(state).validate())
        self.assertIsNone(proptutor.ProofRunner().validate(
            proptutor.encode_proof(state)), "decoded snapshots work too")

    def test_wrong_conclusion(self):
        """Arguments in the wrong order give the wrong conjunction"""
        with self.assertRaisesRegex(proptutor.InvalidRule, '^line 4: '):
            proptutor.ProofRunner(self.proof(((2,), (3,)))).validate()

    def test_bad_referral(self):
        """Arguments must exist and be in scope"""
        with self.assertRaisesRegex(proptutor.InvalidReferral, 'no line 5'):
            proptutor.ProofRunner(self.proof(((2,), (5,)))).validate()
        with self.assertRaises(proptutor.IncompleteLine):
            proptutor.ProofRunner(self.proof(((2,), None))).validate()

    def test_goal(self):
        """The last line must be the goal"""
        with self.assertRaises(proptutor.UnprovedGoal):
            proptutor.ProofRunner(self.proof(end='P or Q')).validate()

    def test_mistakes(self):
        """Every mistake is reported"""
        mistakes = list(proptutor.ProofRunner().mistakes(ProofState.bootstrap()))
        self.assertEqual(len(mistakes), 1)
        self.assertIsInstance(mistakes[0], proptutor.IncompleteLine)
        self.assertTrue(str(mistakes[0]).startswith('line 2: '))
        state = self.proof(((2,), (3,)), end='P or Q')
        kinds = [type(exc) for exc in proptutor.ProofRunner(state).mistakes()]
        self.assertEqual(kinds, [proptutor.InvalidRule, proptutor.UnprovedGoal])

    def test_subproofs(self):
        """Direct proof needs its own subproof"""
        state = proptutor.apply_edit(ProofState.bootstrap(),
                                     proptutor.SetRule(1, InferRule.DIRECT_PROOF))
        runner = proptutor.ProofRunner(state)
        self.assertIsNone(runner.rule_direct_proof(3, state.lines[3]))
        self.assertIsNone(runner.rule_assumption(1, state.lines[1]))
        with self.assertRaises(proptutor.InvalidRule):
            runner.rule_assumption(3, state.lines[3])
        line = state.lines[3].copy()
        line.args = [(2, 2), (2, 1)]
        with self.assertRaises(proptutor.ProofMistake):
            runner.rule_direct_proof(3, line)

if __name__ == '__main__':
    import sys
    if len(sys.argv) > 1:
        with open(sys.argv[1]) as f:
            runner = proptutor.ProofRunner(f.read())
        runner.validate()
    else:
        unittest.main()
