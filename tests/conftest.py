import pytest
import sys
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import worksheet_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from worksheet_toolkit.core.models import Block, BlockType, Difficulty, ExamInfo, QuestionSubtype  # noqa: E402


# Common test fixtures
@pytest.fixture
def make_block():
    """Factory for blocks with sensible defaults."""
    counter = {"n": 0}

    def _create(block_type=BlockType.QUESTION, content="Content", **kwargs):
        counter["n"] += 1
        kwargs.setdefault("id", f"b{counter['n']}")
        return Block(type=block_type, content=content, **kwargs)

    return _create


@pytest.fixture
def mc_question():
    return Block(
        id="q-mc",
        type=BlockType.QUESTION,
        subtype=QuestionSubtype.MULTIPLE_CHOICE,
        content="Which organelle produces ATP?",
        options=("Nucleus", "Mitochondrion", "Ribosome", "Vacuole"),
        correct_answer="2",
        difficulty=Difficulty.MEDIUM,
        material_title="Cell Biology",
    )


@pytest.fixture
def mixed_blocks():
    """Five blocks: question, question, passage, concept, question."""
    return [
        Block(
            id="q1",
            type=BlockType.QUESTION,
            subtype=QuestionSubtype.MULTIPLE_CHOICE,
            content="What is 2 + 2?",
            options=("3", "4", "5"),
            correct_answer="2",
        ),
        Block(
            id="q2",
            type=BlockType.QUESTION,
            subtype=QuestionSubtype.SHORT_ANSWER,
            content="Name the capital of France.",
            correct_answer="Paris",
        ),
        Block(id="p1", type=BlockType.PASSAGE, content="Read the following passage carefully."),
        Block(id="c1", type=BlockType.CONCEPT, content="Photosynthesis converts light into energy."),
        Block(
            id="q3",
            type=BlockType.QUESTION,
            subtype=QuestionSubtype.ESSAY,
            content="Discuss the causes of the French Revolution.",
        ),
    ]


@pytest.fixture
def exam_info():
    return ExamInfo(title="Unit Test", subject="Science", grade="7", date="2026-03-02", time="40")


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple test image."""
    img = Image.new("RGB", (200, 100), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path
