"""Tests for the bytecode interpreter, structural mutation and crossover."""

from __future__ import annotations

import random

import pytest

from evonomics.config.constants import BRANCH_LIMIT, MAX_EXECUTE, NUM_INPUTS, NUM_REGISTERS
from evonomics.domain.actions import NOTHING_ACTION, Action, ActionKind
from evonomics.domain.codon import Codon, Op
from evonomics.domain.direction import MooreDirection
from evonomics.domain.genome import Genome, _delete_codon, _insert_codon, crossover

INPUTS = [float(i) for i in range(NUM_INPUTS)]
MEMORY = [0.0] * NUM_REGISTERS


def lit(value: float) -> Codon:
    return Codon(Op.LITERAL, value)


def run(*codons: Codon, entry: int = 0, inputs: list[float] | None = None) -> Action:
    genome = Genome(tuple(codons), (0,))
    return genome.execute(INPUTS if inputs is None else inputs, list(MEMORY), entry)


class TestGenomeValidation:
    def test_rejects_unsorted_entries(self) -> None:
        with pytest.raises(ValueError, match="sorted and unique"):
            Genome((Codon(Op.NOTHING),) * 3, (2, 0))

    def test_rejects_duplicate_entries(self) -> None:
        with pytest.raises(ValueError, match="sorted and unique"):
            Genome((Codon(Op.NOTHING),) * 3, (1, 1))

    def test_rejects_out_of_range_entry(self) -> None:
        with pytest.raises(ValueError, match="index into sequence"):
            Genome((Codon(Op.NOTHING),), (1,))

    def test_random_genomes_are_valid(self) -> None:
        rng = random.Random(0)
        for _ in range(200):
            genome = Genome.random(rng)
            assert all(0 <= e < len(genome) for e in genome.entries)


class TestExecute:
    def test_empty_genome_yields_nothing(self) -> None:
        assert Genome().execute(INPUTS, MEMORY, 0) == NOTHING_ACTION

    def test_arithmetic_then_write(self) -> None:
        action = run(lit(2.0), lit(3.0), Codon(Op.MUL), lit(1.0), Codon(Op.SUB), Codon(Op.WRITE, 1))
        assert action == Action(ActionKind.WRITE, register=1, value=5.0)

    def test_write_register_is_reduced_modulo_memory(self) -> None:
        action = run(lit(7.0), Codon(Op.WRITE, NUM_REGISTERS * 10 + 3))
        assert action.register == 3

    def test_input_index_is_reduced_modulo_inputs(self) -> None:
        action = run(Codon(Op.INPUT, NUM_INPUTS + 5), Codon(Op.WRITE, 0))
        assert action.value == 5.0

    def test_copy_index_is_reduced_modulo_stack(self) -> None:
        action = run(lit(4.0), lit(9.0), Codon(Op.COPY, 3), Codon(Op.WRITE, 0))
        # depth 3 % 2 == 1 selects the element below the top
        assert action.value == 4.0

    def test_read_pushes_register(self) -> None:
        genome = Genome((Codon(Op.READ, 2), Codon(Op.WRITE, 0)), (0,))
        action = genome.execute(INPUTS, [0.0, 0.0, 6.5, 0.0], 0)
        assert action.value == 6.5

    def test_division_by_zero_halts(self) -> None:
        assert run(lit(1.0), lit(0.0), Codon(Op.DIV), Codon(Op.WRITE, 0)) == NOTHING_ACTION

    def test_stack_underflow_halts(self) -> None:
        assert run(lit(1.0), Codon(Op.ADD), Codon(Op.WRITE, 0)) == NOTHING_ACTION
        assert run(Codon(Op.WRITE, 0)) == NOTHING_ACTION

    def test_nothing_codon_halts(self) -> None:
        move = Codon(Op.MOVE, MooreDirection.UP)
        assert run(Codon(Op.NOTHING), move) == NOTHING_ACTION

    def test_less_branches_when_smaller(self) -> None:
        program = (
            lit(1.0),
            lit(2.0),
            Codon(Op.LESS, 2),
            Codon(Op.MOVE, MooreDirection.LEFT),
            Codon(Op.MOVE, MooreDirection.RIGHT),
        )
        assert run(*program).direction is MooreDirection.RIGHT

    def test_less_falls_through_otherwise(self) -> None:
        program = (
            lit(2.0),
            lit(1.0),
            Codon(Op.LESS, 2),
            Codon(Op.MOVE, MooreDirection.LEFT),
            Codon(Op.MOVE, MooreDirection.RIGHT),
        )
        assert run(*program).direction is MooreDirection.LEFT

    def test_program_counter_wraps(self) -> None:
        action = run(Codon(Op.DIVIDE, MooreDirection.DOWN), Codon(Op.JUMP, -5), entry=1)
        # JUMP -5 from 1 wraps to index 0 in a two-codon sequence
        assert action == Action(ActionKind.DIVIDE, direction=MooreDirection.DOWN)

    def test_infinite_loop_is_bounded(self) -> None:
        assert run(Codon(Op.JUMP, 0)) == NOTHING_ACTION

    def test_literal_pushing_loop_is_bounded(self) -> None:
        # Grows the stack every iteration until the step cap.
        assert run(lit(1.0), Codon(Op.JUMP, -1)) == NOTHING_ACTION

    def test_step_cap_is_exact(self) -> None:
        filler = [lit(0.0)] * (MAX_EXECUTE - 1)
        within = run(*filler, Codon(Op.MOVE, MooreDirection.UP))
        beyond = run(*filler, lit(0.0), Codon(Op.MOVE, MooreDirection.UP))
        assert within.kind is ActionKind.MOVE
        assert beyond == NOTHING_ACTION

    def test_dynamic_trade_pops_rate_then_quantity(self) -> None:
        action = run(lit(-3.9), lit(2.5), Codon(Op.TRADE))
        assert action == Action(ActionKind.TRADE, quantity=-3, rate=2.5)

    def test_trade_with_negative_rate_is_nothing(self) -> None:
        assert run(lit(3.0), lit(-1.0), Codon(Op.TRADE)) == NOTHING_ACTION

    def test_trade_with_non_finite_quantity_is_nothing(self) -> None:
        assert run(lit(float("inf")), lit(1.0), Codon(Op.TRADE)) == NOTHING_ACTION

    def test_fixed_trade(self) -> None:
        assert run(Codon(Op.TRADE_FIXED, (4, 1.5))) == Action(
            ActionKind.TRADE, quantity=4, rate=1.5
        )

    def test_rotations(self) -> None:
        assert run(Codon(Op.ROTATE_LEFT)).kind is ActionKind.ROTATE_LEFT
        assert run(Codon(Op.ROTATE_RIGHT)).kind is ActionKind.ROTATE_RIGHT

    def test_adversarial_random_genomes_terminate(self) -> None:
        rng = random.Random(11)
        for _ in range(300):
            genome = Genome.random(rng)
            for entry in genome.entries:
                action = genome.execute(INPUTS, list(MEMORY), entry)
                if action.kind is ActionKind.WRITE:
                    assert 0 <= action.register < NUM_REGISTERS


class TestGenes:
    def test_implicit_leading_gene(self) -> None:
        codons = tuple(lit(float(i)) for i in range(5))
        genes = Genome(codons, (2, 4)).genes()
        assert genes == [codons[0:2], codons[2:4], codons[4:5]]

    def test_no_entries_means_no_genes(self) -> None:
        assert Genome((lit(1.0),), ()).genes() == []


class TestMutate:
    def test_lengths_change_by_at_most_one(self) -> None:
        rng = random.Random(5)
        genome = Genome.random(rng)
        for _ in range(2_000):
            child = genome.mutate(rng)
            assert abs(len(child) - len(genome)) <= 1
            assert abs(len(child.entries) - len(genome.entries)) <= 1
            assert all(0 <= e < len(child) for e in child.entries)
            genome = child

    def test_returns_new_genome(self) -> None:
        rng = random.Random(1)
        genome = Genome((lit(1.0), lit(2.0)), (0,))
        before = (genome.sequence, genome.entries)
        genome.mutate(rng)
        assert (genome.sequence, genome.entries) == before

    def test_mutating_empty_genome(self) -> None:
        rng = random.Random(2)
        for _ in range(50):
            child = Genome().mutate(rng)
            assert len(child) <= 1
            assert len(child.entries) <= 1

    def test_insert_keeps_branch_target(self) -> None:
        marker = Codon(Op.MOVE, MooreDirection.UP)
        sequence = [Codon(Op.JUMP, 3), lit(0.0), lit(0.0), marker]
        edited = _insert_codon(sequence, 2, Codon(Op.NOTHING))
        assert edited[0] == Codon(Op.JUMP, 4)
        assert edited[4] == marker

    def test_delete_keeps_branch_target(self) -> None:
        marker = Codon(Op.MOVE, MooreDirection.UP)
        sequence = [lit(0.0), lit(0.0), marker, Codon(Op.JUMP, -3)]
        edited = _delete_codon(sequence, 1, random.Random(0))
        assert edited == [lit(0.0), marker, Codon(Op.JUMP, -2)]

    def test_delete_rerandomizes_branch_to_removed_codon(self) -> None:
        sequence = [Codon(Op.JUMP, 2), lit(0.0), lit(1.0), lit(2.0)]
        edited = _delete_codon(sequence, 2, random.Random(0))
        assert len(edited) == 3
        assert edited[0].op is Op.JUMP
        assert -BRANCH_LIMIT < edited[0].operand < BRANCH_LIMIT  # type: ignore[operator]


class TestCrossover:
    def test_requires_a_parent(self) -> None:
        with pytest.raises(ValueError, match="at least one genome"):
            crossover(random.Random(0), [])

    def test_child_genes_are_parent_genes(self) -> None:
        rng = random.Random(4)
        for _ in range(200):
            parents = [Genome.random(rng) for _ in range(rng.randint(1, 4))]
            parent_genes = {gene for parent in parents for gene in parent.genes()}
            max_genes = max(len(parent.genes()) for parent in parents)
            child = crossover(rng, parents)
            child_genes = child.genes()
            assert len(child_genes) <= max_genes
            assert all(gene in parent_genes for gene in child_genes)

    def test_single_parent_is_reproduced(self) -> None:
        codons = tuple(lit(float(i)) for i in range(6))
        parent = Genome(codons, (0, 3))
        assert crossover(random.Random(0), [parent]) == parent
