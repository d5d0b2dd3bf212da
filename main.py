# C:\dev\svm_hmm\main.py

import argparse
import sys
from pathlib import Path

from tqdm import tqdm

# Add project root to path for robust execution
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from svmhmm import INST_NAME, INST_VERSION
from svmhmm.config import StructLearnParm, load_config
from svmhmm.data_structures import StructModel
from svmhmm.io_utils import read_examples, tag_frequency_table
from svmhmm.tags import TagRegistry

def main():
    """
    Command-line entry point for inspecting an SVM-HMM example file.

    The script performs the following steps:
    1.  Loads the learning parameters (`config.yaml`) if the file exists.
    2.  Reads the examples, interning every tag into a fresh registry.
    3.  Prints example, token and tag counts together with the largest
        feature number and the size of the joint feature space.
    4.  Optionally writes the per-tag frequency table as CSV.
    """
    parser = argparse.ArgumentParser(
        description=f"Summarize an {INST_NAME} {INST_VERSION} example file.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "--input",
        required=True,
        help="Path to the example file (TAG qid:N idx:val ... # text)."
    )
    parser.add_argument(
        "--config",
        default="config.yaml",
        help="Path to the learning parameters YAML file."
    )
    parser.add_argument(
        "--feature-space-size",
        type=int,
        default=None,
        help="Override the per-token feature space size from the config."
    )
    parser.add_argument(
        "--tag-table",
        help="Optional: path to write a CSV with the frequency of every tag."
    )
    args = parser.parse_args()

    try:
        # 1. Load configuration
        if Path(args.config).exists():
            print(f"Loading configuration from {args.config}...")
            parm = load_config(args.config)
        else:
            print(f"Warning: {args.config} not found. Using default learning parameters.")
            parm = StructLearnParm()

        # 2. Read examples
        print(f"Reading examples from {args.input}...")
        registry = TagRegistry()
        examples = read_examples(args.input, registry)

        # 3. Summarize
        num_tokens = 0
        max_feature = 0
        for ex in tqdm(examples, desc="Scanning examples"):
            num_tokens += len(ex.pattern)
            for token in ex.pattern:
                max_feature = max(max_feature, token.features.max_index())

        if args.feature_space_size is not None:
            parm.feature_space_size = args.feature_space_size
        if not parm.feature_space_size:
            parm.feature_space_size = max_feature
        model = StructModel.create(parm, registry.num_tags())

        print(f"\nExamples:            {len(examples)}")
        print(f"Tokens:              {num_tokens}")
        print(f"Tags:                {registry.num_tags()}")
        print(f"Max feature number:  {max_feature}")
        print(f"Feature space size:  {parm.feature_space_size}")
        print(f"sizePsi:             {model.size_psi}")

        # 4. Optional tag table
        if args.tag_table:
            out_path = Path(args.tag_table)
            out_path.parent.mkdir(parents=True, exist_ok=True)
            tag_frequency_table(examples, registry).to_csv(out_path, index=False)
            print(f"\nSuccessfully wrote tag table to {args.tag_table}")

    except (FileNotFoundError, ValueError, TypeError, KeyError) as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)

if __name__ == "__main__":
    main()
