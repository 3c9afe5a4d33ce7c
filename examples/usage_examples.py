"""
Examples of using the TagHMM system.

This file demonstrates building a model by hand, training one from tagged
sentences, decoding, scoring, configuration and error handling.
"""

import tempfile
from pathlib import Path


def example_hand_built_model():
    """Example of filling the probability matrices directly."""
    from tag_hmm import (
        EmissionMatrix, EntityIndex, HiddenMarkovModel,
        InitialStateMatrix, Observation, State, TransitionMatrix
    )

    print("Example: Hand-built model")
    print("-" * 40)

    adjective, noun = State("A"), State("N")
    crazy, clown = Observation("crazy"), Observation("clown")

    states = EntityIndex([adjective, noun], kind="state")
    observations = EntityIndex([crazy, clown], kind="observation")

    initial = InitialStateMatrix(states)
    initial[adjective] = 0.5
    initial[noun] = 0.5

    transition = TransitionMatrix(states)
    transition[adjective, noun] = 1.0
    transition[noun, adjective] = 0.5
    transition[noun, noun] = 0.5

    emission = EmissionMatrix(states, observations)
    emission[adjective, crazy] = 1.0
    emission[noun, clown] = 1.0

    model = HiddenMarkovModel(initial, transition, emission, validate=True)

    print(f"Model: {model}")
    print(f"Most probable tags for 'crazy clown': {model.viterbi([crazy, clown])}")
    print()


def example_train_and_decode():
    """Example of supervised training from tagged sentences."""
    from tag_hmm import TaggerTrainer
    from tag_hmm.demo import KILLER_CLOWN_SENTENCES, killer_clown_training_set

    print("Example: Training and decoding")
    print("-" * 40)

    trainer = TaggerTrainer()
    model = trainer.fit(killer_clown_training_set())

    print(f"Trained on {trainer.training_stats['n_sequences']} sentences "
          f"({trainer.training_stats['n_tokens']} tokens)")

    for sentence in KILLER_CLOWN_SENTENCES:
        path = model.decode(sentence)
        print(f"  {path}  P(path)={path.probability:.4g}  P(O)={model.evaluate(sentence):.4g}")
    print()


def example_corpus_file():
    """Example of training from a word/TAG text corpus."""
    from tag_hmm.evaluate import evaluate_tagger
    from tag_hmm.io import load_corpus
    from tag_hmm.train import TaggerTrainer

    print("Example: Corpus files")
    print("-" * 40)

    with tempfile.TemporaryDirectory() as tmpdir:
        corpus_file = Path(tmpdir) / "corpus.txt"
        corpus_file.write_text(
            "killer/N clown/N\n"
            "crazy/A problem/N\n"
            "problem/N crazy/A clown/N\n"
        )

        sentences = load_corpus(corpus_file)
        model = TaggerTrainer().fit(sentences)
        results = evaluate_tagger(model, sentences)

    print(f"Token accuracy on the training corpus: {results['token_accuracy']:.2%}")
    print()


def example_cli_commands():
    """Example CLI commands."""
    print("Example: CLI Commands")
    print("-" * 40)

    print("tag-hmm demo")
    print("tag-hmm train show corpus.txt --validate")
    print("tag-hmm predict tag corpus.txt killer crazy clown problem --details")
    print("tag-hmm predict score corpus.txt killer clown --log")
    print("tag-hmm evaluate test train.txt test.txt -o metrics.json")
    print()


def example_custom_configuration():
    """Example of custom configuration."""
    from tag_hmm.config import get_config, reset_config, set_config, update_config

    print("Example: Custom Configuration")
    print("-" * 40)

    print(f"Current token separator: {get_config('corpus', 'token_separator')!r}")

    set_config('corpus', 'token_separator', '_')
    update_config({
        'hmm': {'validate_stochastic': True},
        'evaluation': {'log_probability': True}
    })

    print("Configuration updated:")
    print(f"- Token separator: {get_config('corpus', 'token_separator')!r}")
    print(f"- Validate stochastic rows: {get_config('hmm', 'validate_stochastic')}")

    reset_config()
    print()


def example_error_handling():
    """Example of proper error handling."""
    from tag_hmm import Observation, TaggerTrainer
    from tag_hmm.demo import killer_clown_training_set
    from tag_hmm.exceptions import (
        EmptySequenceError,
        InvalidProbabilityError,
        UnregisteredEntityError
    )

    print("Example: Error Handling")
    print("-" * 40)

    model = TaggerTrainer().fit(killer_clown_training_set())

    try:
        model.viterbi([Observation("juggler")])
    except UnregisteredEntityError as e:
        print(f"Unknown word: {e}")

    try:
        model.evaluate([])
    except EmptySequenceError as e:
        print(f"Empty input: {e}")

    try:
        model.initial.set_probability_at(0, 1.5)
    except InvalidProbabilityError as e:
        print(f"Rejected write: {e}")

    print()


if __name__ == "__main__":
    print("TagHMM Usage Examples")
    print("=" * 50)
    print()

    example_hand_built_model()
    example_train_and_decode()
    example_corpus_file()
    example_cli_commands()
    example_custom_configuration()
    example_error_handling()

    print("For more details, see:")
    print("- README.md")
    print("- CLI Examples: tag-hmm examples")
