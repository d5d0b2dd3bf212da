# C:\dev\svm_hmm\svmhmm\config.py

"""Loading and validation of the structural learning parameters.

This module defines `StructLearnParm`, the typed configuration record the
training loop reads its options from, and `load_config`, which builds one
from a YAML file. Keys missing from the file fall back to the SVM-HMM
defaults defined below.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

__all__ = [
    "DEFAULT_EPS",
    "DEFAULT_RESCALING",
    "DEFAULT_LOSS_FCT",
    "SLACK_RESCALING",
    "MARGIN_RESCALING",
    "MAX_CUSTOM_ARGS",
    "MAX_CUSTOM_ARG_LEN",
    "MAX_NUM_EXAMPLES",
    "StructLearnParm",
    "load_config",
]

DEFAULT_EPS = 0.1
SLACK_RESCALING = 1
MARGIN_RESCALING = 2
DEFAULT_RESCALING = MARGIN_RESCALING
DEFAULT_LOSS_FCT = 1  # Hamming loss, the one the Viterbi decoder supports
MAX_NUM_EXAMPLES = 10_000_000

MAX_CUSTOM_ARGS = 20
MAX_CUSTOM_ARG_LEN = 300


@dataclass
class StructLearnParm:
    """
    Options consumed by the structural training loop.

    Attributes:
        epsilon: Precision to which the quadratic program is solved.
        newconstretrain: Number of new constraints to accumulate before the
                         QP solution is recomputed.
        ccache_size: Maximum number of constraints cached per example.
        C: Trade-off between margin and training loss.
        custom_argv: Free-form algorithm-specific option strings.
        slack_norm: 1 for an L1 slack penalty, 2 for L2.
        loss_type: 1 for slack rescaling, 2 for margin rescaling.
        loss_function: Selector for the loss function.
        feature_space_size: Number of features available to a single token.
    """
    epsilon: float = DEFAULT_EPS
    newconstretrain: float = 100.0
    ccache_size: int = 5
    C: float = 0.01
    custom_argv: List[str] = field(default_factory=list)
    slack_norm: int = 1
    loss_type: int = DEFAULT_RESCALING
    loss_function: int = DEFAULT_LOSS_FCT
    feature_space_size: int = 0

    @property
    def custom_argc(self) -> int:
        return len(self.custom_argv)

    def add_custom_arg(self, arg: str) -> None:
        """Appends one custom option string, enforcing the size limits."""
        if len(self.custom_argv) >= MAX_CUSTOM_ARGS:
            raise ValueError(f"At most {MAX_CUSTOM_ARGS} custom options are allowed.")
        if len(arg) > MAX_CUSTOM_ARG_LEN:
            raise ValueError(
                f"Custom option is {len(arg)} characters long (max {MAX_CUSTOM_ARG_LEN})."
            )
        self.custom_argv.append(arg)

    def validate(self) -> None:
        """
        Checks that every option lies in its allowed range.

        Raises:
            ValueError: Describing the first offending option.
        """
        if self.slack_norm not in (1, 2):
            raise ValueError(f"slack_norm must be 1 or 2, got {self.slack_norm}")
        if self.loss_type not in (SLACK_RESCALING, MARGIN_RESCALING):
            raise ValueError(
                f"loss_type must be {SLACK_RESCALING} (slack rescaling) or "
                f"{MARGIN_RESCALING} (margin rescaling), got {self.loss_type}"
            )
        if self.epsilon <= 0:
            raise ValueError(f"epsilon must be positive, got {self.epsilon}")
        if self.C <= 0:
            raise ValueError(f"C must be positive, got {self.C}")
        if self.ccache_size < 0:
            raise ValueError(f"ccache_size must not be negative, got {self.ccache_size}")
        if self.feature_space_size < 0:
            raise ValueError(
                f"feature_space_size must not be negative, got {self.feature_space_size}"
            )
        if len(self.custom_argv) > MAX_CUSTOM_ARGS:
            raise ValueError(f"At most {MAX_CUSTOM_ARGS} custom options are allowed.")
        for arg in self.custom_argv:
            if len(arg) > MAX_CUSTOM_ARG_LEN:
                raise ValueError(
                    f"Custom option is {len(arg)} characters long (max {MAX_CUSTOM_ARG_LEN})."
                )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "epsilon": self.epsilon,
            "newconstretrain": self.newconstretrain,
            "ccache_size": self.ccache_size,
            "C": self.C,
            "custom_argv": list(self.custom_argv),
            "slack_norm": self.slack_norm,
            "loss_type": self.loss_type,
            "loss_function": self.loss_function,
            "feature_space_size": self.feature_space_size,
        }


def load_config(path: str = "config.yaml", overrides: Optional[Dict[str, Any]] = None) -> StructLearnParm:
    """
    Loads learning parameters from a YAML file.

    The options may sit at the root of the file or under a `learn` section.
    Values given in `overrides` (e.g. from the command line) win over the
    file.

    Args:
        path: The path to the YAML configuration file.
        overrides: Optional option values applied after the file is read.

    Returns:
        A validated `StructLearnParm`.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the YAML cannot be parsed or an option is out of range.
        TypeError: If the root of the YAML file is not a mapping.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            y = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found at: {path}")
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML file at {path}: {e}")

    if y is None:
        y = {}
    if not isinstance(y, dict):
        raise TypeError(f"Configuration file {path} must be a dictionary.")

    section = y.get("learn", y)
    if not isinstance(section, dict):
        raise TypeError(f"The 'learn' section of {path} must be a dictionary.")
    section = {**section, **(overrides or {})}

    custom_argv = section.get("custom_argv", [])
    if not isinstance(custom_argv, list):
        raise TypeError(f"'custom_argv' in {path} must be a list of strings.")

    parm = StructLearnParm(
        epsilon=float(section.get("epsilon", DEFAULT_EPS)),
        newconstretrain=float(section.get("newconstretrain", 100.0)),
        ccache_size=int(section.get("ccache_size", 5)),
        C=float(section.get("C", 0.01)),
        custom_argv=[str(a) for a in custom_argv],
        slack_norm=int(section.get("slack_norm", 1)),
        loss_type=int(section.get("loss_type", DEFAULT_RESCALING)),
        loss_function=int(section.get("loss_function", DEFAULT_LOSS_FCT)),
        feature_space_size=int(section.get("feature_space_size", 0)),
    )
    parm.validate()
    return parm
