# C:\dev\svm_hmm\scripts\evaluate_model.py

"""Command-line script for scoring predicted tag sequences against gold data.

The gold file is an SVM-HMM example file; the prediction file holds one tag
per line with a blank line after each example, as written by
`svmhmm.io_utils.write_predictions`. The script reports token-level tagging
accuracy and, optionally, writes every disagreement to a CSV file for error
analysis.
"""
import argparse
import csv
import json
import sys
from pathlib import Path

from tqdm import tqdm

# Add project root to path to allow for package imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from svmhmm.data_structures import Example, StructTestStats
from svmhmm.io_utils import read_examples, read_predictions
from svmhmm.tags import TagRegistry
from svmhmm.types import Label


def evaluate(examples: list[Example], predictions: list[Label], registry: TagRegistry):
    """
    Compares predictions with the gold labels, example by example.

    Returns:
        A tuple `(stats, disagreements)` where `disagreements` is a list of
        dicts with the example qid, position, token text, gold and predicted
        tags.

    Raises:
        ValueError: If the number of examples or an example's length differs.
    """
    if len(examples) != len(predictions):
        raise ValueError(
            f"Gold data has {len(examples)} examples but {len(predictions)} predictions were given."
        )

    stats = StructTestStats()
    disagreements = []
    for ex, predicted in tqdm(zip(examples, predictions), total=len(examples), desc="Evaluating"):
        if len(predicted) != len(ex.label):
            raise ValueError(
                f"Example qid {ex.qid}: {len(ex.label)} gold tags but {len(predicted)} predicted."
            )
        stats.record(ex.label, predicted)
        for i, (gold_id, pred_id) in enumerate(zip(ex.label, predicted)):
            if gold_id != pred_id:
                disagreements.append({
                    "qid": ex.qid,
                    "index": i,
                    "token": ex.pattern.get_token(i).text,
                    "gold": registry.tag_by_id(gold_id),
                    "predicted": registry.tag_by_id(pred_id),
                })
    return stats, disagreements


def main():
    """Main entry point for the tagging evaluation script."""
    parser = argparse.ArgumentParser(
        description="Evaluate predicted tags against a gold SVM-HMM example file.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument("--gold", required=True, help="Path to the gold example file.")
    parser.add_argument("--predictions", required=True, help="Path to the predicted tags file.")
    parser.add_argument("--disagreements-out", help="Optional: Path to write a detailed disagreements CSV file.")
    args = parser.parse_args()

    try:
        print("Loading files...")
        registry = TagRegistry()
        examples = read_examples(args.gold, registry)
        predictions = read_predictions(args.predictions, registry)

        stats, disagreements = evaluate(examples, predictions, registry)

        print("\n--- Tagging Accuracy ---")
        print(json.dumps(stats.to_dict({"num_examples": len(examples)}), indent=2))

        if args.disagreements_out and disagreements:
            Path(args.disagreements_out).parent.mkdir(parents=True, exist_ok=True)
            print(f"\nWriting {len(disagreements)} disagreements to {args.disagreements_out}...")
            with open(args.disagreements_out, "w", newline="", encoding="utf-8") as f:
                writer = csv.DictWriter(f, fieldnames=["qid", "index", "token", "gold", "predicted"])
                writer.writeheader()
                writer.writerows(disagreements)

    except (FileNotFoundError, ValueError, KeyError) as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)

if __name__ == "__main__":
    main()
