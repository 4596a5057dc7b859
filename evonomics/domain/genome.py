"""Evolvable bytecode genome: execution, structural mutation, and crossover.

A :class:`Genome` is an immutable value shared by every brain descended from
it. ``mutate`` and ``crossover`` always build a new genome; holders rebind
their handle instead of editing a shared instance.

Gene-conflict contract: a gene run ends at its first terminal instruction,
so each run yields exactly one action. When several genes of one brain
produce competing decisions in the same tick, the last one executed wins
(see :meth:`evonomics.domain.brain.Brain.decide`).
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from itertools import pairwise
from random import Random

from evonomics.config.constants import INITIAL_ENTRIES_SCALE, INITIAL_GENOME_SCALE, MAX_EXECUTE
from evonomics.domain.actions import NOTHING_ACTION, Action, ActionKind
from evonomics.domain.codon import Codon, Op, random_branch_offset, random_codon

Gene = tuple[Codon, ...]


def _trade_action(quantity: float, rate: float) -> Action:
    if not (math.isfinite(quantity) and math.isfinite(rate)) or rate < 0.0:
        return NOTHING_ACTION
    return Action(ActionKind.TRADE, quantity=int(quantity), rate=float(rate))


@dataclass(frozen=True)
class Genome:
    """Instruction sequence plus sorted, unique gene entry offsets."""

    sequence: tuple[Codon, ...] = ()
    entries: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        if list(self.entries) != sorted(set(self.entries)):
            raise ValueError("entries must be sorted and unique")
        if self.entries and not 0 <= self.entries[0] <= self.entries[-1] < len(self.sequence):
            raise ValueError("entries must index into sequence")

    def __len__(self) -> int:
        return len(self.sequence)

    @classmethod
    def random(cls, rng: Random) -> Genome:
        """Sample a genome with exponentially distributed length and entry count."""
        length = int(rng.expovariate(1.0) * INITIAL_GENOME_SCALE)
        sequence = tuple(random_codon(rng) for _ in range(length))
        if length == 0:
            return cls(sequence, ())
        count = int(rng.expovariate(1.0) * INITIAL_ENTRIES_SCALE)
        entries = sorted({rng.randrange(length) for _ in range(count)})
        return cls(sequence, tuple(entries))

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def execute(self, inputs: Sequence[float], memory: Sequence[float], entry: int) -> Action:
        """Run the gene starting at *entry* for at most ``MAX_EXECUTE`` steps.

        Returns the first terminal action reached. Stack underflow, division
        by zero, the ``NOTHING`` codon and step exhaustion all yield the
        nothing action.
        """
        sequence = self.sequence
        length = len(sequence)
        if length == 0:
            return NOTHING_ACTION
        at = entry % length
        stack: list[float] = []
        for _ in range(MAX_EXECUTE):
            codon = sequence[at]
            op = codon.op
            if op is Op.ADD or op is Op.SUB or op is Op.MUL or op is Op.DIV:
                if len(stack) < 2:
                    break
                b = stack.pop()
                a = stack.pop()
                if op is Op.ADD:
                    stack.append(a + b)
                elif op is Op.SUB:
                    stack.append(a - b)
                elif op is Op.MUL:
                    stack.append(a * b)
                else:
                    if b == 0.0:
                        break
                    stack.append(a / b)
            elif op is Op.LITERAL:
                stack.append(codon.literal)
            elif op is Op.LESS:
                if len(stack) < 2:
                    break
                b = stack.pop()
                a = stack.pop()
                if a < b:
                    at = (at + codon.offset) % length
                    continue
            elif op is Op.JUMP:
                at = (at + codon.offset) % length
                continue
            elif op is Op.COPY:
                if not stack:
                    break
                stack.append(stack[-1 - codon.index % len(stack)])
            elif op is Op.READ:
                if not memory:
                    break
                stack.append(memory[codon.index % len(memory)])
            elif op is Op.INPUT:
                if not inputs:
                    break
                stack.append(inputs[codon.index % len(inputs)])
            elif op is Op.WRITE:
                if not stack or not memory:
                    break
                register = codon.index % len(memory)
                return Action(ActionKind.WRITE, register=register, value=stack.pop())
            elif op is Op.MOVE:
                return Action(ActionKind.MOVE, direction=codon.direction)
            elif op is Op.DIVIDE:
                return Action(ActionKind.DIVIDE, direction=codon.direction)
            elif op is Op.TRADE:
                if len(stack) < 2:
                    break
                rate = stack.pop()
                quantity = stack.pop()
                return _trade_action(quantity, rate)
            elif op is Op.TRADE_FIXED:
                quantity, rate = codon.fixed_trade
                return _trade_action(quantity, rate)
            elif op is Op.ROTATE_LEFT:
                return Action(ActionKind.ROTATE_LEFT)
            elif op is Op.ROTATE_RIGHT:
                return Action(ActionKind.ROTATE_RIGHT)
            else:
                break
            at = (at + 1) % length
        return NOTHING_ACTION

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    def genes(self) -> list[Gene]:
        """Split the sequence into genes at the entry offsets.

        Code before the first entry forms an implicit leading gene. A genome
        without entries has no genes.
        """
        if not self.entries:
            return []
        points = list(self.entries)
        if points[0] != 0:
            points.insert(0, 0)
        points.append(len(self.sequence))
        return [self.sequence[start:stop] for start, stop in pairwise(points)]

    def mutate(self, rng: Random) -> Genome:
        """Return a copy with one codon edit and one entry edit applied.

        Sequence length and entry count each change by at most one. Branch
        operands are rewritten so they keep pointing at the same instruction;
        a branch whose target was deleted gets a fresh random offset.
        """
        sequence = list(self.sequence)
        entries = list(self.entries)
        dropped_entry = False

        if rng.random() < 0.5:
            position = rng.randint(0, len(sequence))
            sequence = _insert_codon(sequence, position, random_codon(rng))
            entries = [e + 1 if e >= position else e for e in entries]
        elif sequence:
            position = rng.randrange(len(sequence))
            sequence = _delete_codon(sequence, position, rng)
            kept = [e for e in entries if e != position]
            dropped_entry = len(kept) != len(entries)
            entries = [e - 1 if e > position else e for e in kept]

        if sequence and rng.random() < 0.5:
            position = rng.randrange(len(sequence))
            if position not in entries:
                entries.append(position)
                entries.sort()
        elif entries and not dropped_entry:
            del entries[rng.randrange(len(entries))]

        return Genome(tuple(sequence), tuple(entries))


def _insert_codon(sequence: list[Codon], position: int, codon: Codon) -> list[Codon]:
    old_length = len(sequence)
    result: list[Codon] = []
    for index, current in enumerate(sequence):
        if current.is_branch:
            target = (index + current.offset) % old_length
            new_index = index + (index >= position)
            new_target = target + (target >= position)
            current = current.with_operand(new_target - new_index)
        result.append(current)
    result.insert(position, codon)
    return result


def _delete_codon(sequence: list[Codon], position: int, rng: Random) -> list[Codon]:
    old_length = len(sequence)
    result: list[Codon] = []
    for index, current in enumerate(sequence):
        if index == position:
            continue
        if current.is_branch:
            target = (index + current.offset) % old_length
            if target == position:
                current = current.with_operand(random_branch_offset(rng))
            else:
                new_index = index - (index > position)
                new_target = target - (target > position)
                current = current.with_operand(new_target - new_index)
        result.append(current)
    return result


def crossover(rng: Random, genomes: Iterable[Genome]) -> Genome:
    """Recombine parent genomes gene by gene.

    Parents are shuffled, split into genes, and padded with empty genes at
    random positions to a common gene count. Each slot of the child is then
    taken from a randomly chosen parent; every non-empty gene appended
    starts a new entry.
    """
    parents = list(genomes)
    if not parents:
        raise ValueError("crossover requires at least one genome")
    rng.shuffle(parents)

    gene_lists = [parent.genes() for parent in parents]
    highest_num_genes = max(len(genes) for genes in gene_lists)
    for genes in gene_lists:
        for _ in range(highest_num_genes - len(genes)):
            genes.insert(rng.randint(0, len(genes)), ())

    sequence: list[Codon] = []
    entries: list[int] = []
    for slot in range(highest_num_genes):
        gene = gene_lists[rng.randrange(len(gene_lists))][slot]
        if gene:
            entries.append(len(sequence))
            sequence.extend(gene)
    return Genome(tuple(sequence), tuple(entries))
