#!/usr/bin/env python3
"""Demo of a shelllab session working through an exercise."""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from shelllab import exercises
from shelllab.terminal import TerminalSession


def main():
    print("=" * 60)
    print("shelllab - Exercise Demo")
    print("=" * 60)

    path = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'navigation.json')
    exercise = exercises.load(path)[0]
    session = TerminalSession(exercise=exercise)

    print("\n1. Running the worked examples...")
    for index, example in enumerate(exercise.examples):
        submission = session.run_example(index)
        print(f"\n$ {example.command}")
        if submission.output:
            print(submission.output)
        for task in submission.completed:
            print(f"  -> completed: {exercise.tasks[task]}")

    print("\n2. A few mistakes...")
    for line in ["cat documents", "grep", "foobar"]:
        print(f"\n$ {line}")
        print(session.execute_command(line))

    print(f"\nProgress: {session.progress.summary()}")
    print("\nScrollback:")
    for entry in session.state.history:
        print(f"  [{entry.kind.value:7}] {entry.text.splitlines()[0] if entry.text else ''}")


if __name__ == "__main__":
    main()
