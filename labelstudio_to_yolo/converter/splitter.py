import math
import random
from typing import List, Sequence

from labelstudio_to_yolo.lib import setup_logger, DatasetSplit, LabelPair

logger = setup_logger(__name__)


def make_rng(seed: int) -> random.Random:
    """Create the generator that drives one split; never the module-level one."""
    return random.Random(seed)


def split_dataset(
    pairs: Sequence[LabelPair], train_split: float, rng: random.Random
) -> DatasetSplit:
    """
    Split the pairs into train and validation sets.

    Args:
        pairs: Image-label pairs in the order they were discovered
        train_split: Fraction of the pairs assigned to the training set
        rng: Seeded generator used for the shuffle

    Returns:
        DatasetSplit whose train list holds the first floor(len * train_split)
        shuffled pairs and whose val list holds the rest
    """
    shuffled: List[LabelPair] = list(pairs)
    rng.shuffle(shuffled)

    train_count = math.floor(len(shuffled) * train_split)

    split = DatasetSplit(train=shuffled[:train_count], val=shuffled[train_count:])
    logger.info(
        f"Dataset split: {len(split.train)} training, {len(split.val)} validation"
    )
    return split
