"""Tableau pipeline: GEN and EVAL over a list of underlying forms."""

import logging
from typing import Iterator, List, Optional

from tqdm import tqdm

from .config import Config, ConstraintConfig
from .constraints import (
    Constraint,
    ConstraintSet,
    Dep,
    FaithfulnessConstraint,
    Ident,
    Max,
    MaxFinalV,
    MaxInitialV,
    Onset,
    RankedConstraint,
    SonSeqPr,
    Syllabify,
)
from .data import TableauWriter, read_forms
from .gen import permute
from .models import SyllabifiedCandidate, TableauRow
from .segments import parse

logger = logging.getLogger(__name__)

# Above this many segments an uncapped form yields more than 65536 competitors
LARGE_FORM_SEGMENTS = 16


class TableauPipeline:
    """
    Builds violation tableaux for underlying forms.

    For each form: parse, generate every deletion competitor, score each
    competitor against the configured constraint set and write one row per
    competitor. No winner is selected; ``total`` is the flat sum of
    violations.
    """

    # Configuration names of the available constraint types
    CONSTRAINT_TYPES = {
        "ident": Ident,
        "dep": Dep,
        "max": Max,
        "max_initial_v": MaxInitialV,
        "max_final_v": MaxFinalV,
        "onset": Onset,
        "son_seq_pr": SonSeqPr,
        "syllabify": Syllabify,
    }

    def __init__(self, config: Config):
        """
        Initialize the pipeline.

        Args:
            config: Pipeline configuration.
        """
        self.config = config
        self.active: List[ConstraintConfig] = [c for c in config.constraints if c.enabled]

        for constraint_config in config.constraints:
            if not constraint_config.enabled:
                logger.info(f"Skipping disabled constraint: {constraint_config.name}")

    def build_constraints(self, underlying: SyllabifiedCandidate) -> ConstraintSet:
        """
        Instantiate the enabled constraints for one underlying form.

        Args:
            underlying: Reference form for the faithfulness constraints.

        Returns:
            The ranked constraint set.
        """
        ranked = []
        for constraint_config in self.active:
            constraint_class = self.CONSTRAINT_TYPES.get(constraint_config.name)
            if constraint_class is None:
                raise ValueError(f"Unknown constraint: {constraint_config.name}")

            if issubclass(constraint_class, FaithfulnessConstraint):
                constraint: Constraint = constraint_class(underlying)
            else:
                constraint = constraint_class()
            ranked.append(RankedConstraint(constraint, constraint_config.rank))

        return ConstraintSet(ranked)

    def evaluate_form(self, text: str) -> Iterator[TableauRow]:
        """
        Generate and score every competitor for one underlying form.

        Args:
            text: The underlying form as raw text.

        Yields:
            One TableauRow per competitor.
        """
        underlying = parse(text, seed=self.config.generation.seed)
        constraints = self.build_constraints(underlying)
        max_deletions = self.config.generation.max_deletions
        if max_deletions is None and len(underlying) > LARGE_FORM_SEGMENTS:
            logger.warning(
                f"{text!r} has {len(underlying)} segments and no max_deletions cap: "
                f"buffering {2 ** len(underlying)} competitors"
            )
        competitors = permute(
            underlying,
            max_deletions=max_deletions,
            seed=self.config.generation.seed,
        )
        logger.debug(f"{text!r}: {len(competitors)} competitors, {constraints}")

        for competitor in competitors:
            violations = dict(constraints.profile(competitor))
            yield TableauRow(
                input=text,
                candidate=str(competitor),
                syllable_parse=competitor.syllable_parse,
                deleted=len(underlying) - len(competitor),
                violations=violations,
                total=sum(violations.values()),
            )

    def run(self, forms: Optional[List[str]] = None) -> int:
        """
        Execute the pipeline.

        Args:
            forms: Underlying forms to evaluate. Read from the input
                configuration when omitted.

        Returns:
            Number of tableau rows written.
        """
        logger.info("Starting tableau pipeline")

        if forms is None:
            forms = read_forms(self.config.input)
        if not forms:
            raise ValueError("No underlying forms to evaluate")

        logger.info(f"Forms: {len(forms)}")
        logger.info(f"Active constraints: {len(self.active)}")
        logger.info(f"Output: {self.config.output.output_path}")

        if not self.active:
            logger.warning("No constraints enabled. All totals will be zero.")

        row_count = 0
        with TableauWriter(
            self.config.output.output_path,
            format=self.config.output.format,
            include_parse=self.config.output.include_parse,
        ) as writer:
            for text in tqdm(forms, desc="Evaluating"):
                for row in self.evaluate_form(text):
                    writer.write_row(row)
                    row_count += 1

        logger.info(f"Pipeline complete. Wrote {row_count} rows for {len(forms)} forms")

        return row_count
