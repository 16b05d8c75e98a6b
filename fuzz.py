#!/usr/bin/env python3
"""
Random fuzzer for the nonce pass.
Generates pages with odd fragment lists and checks that every slot keeps its
nodes, its order, and gets the nonce exactly where it should.
"""

import argparse
import random
import string
import sys
import time
import traceback

from inlinenonce import MarkupNode, PageFragments, matches, on_pre_render_html
from inlinenonce.hook import SLOT_NAMES

TAGS = ["script", "style", "link", "meta", "title", "noscript", "base", "template", "SCRIPT"]

ATTRIBUTES = ["src", "href", "type", "async", "defer", "id", "data-x", "nonce", "media", "rel", "NONCE"]

INLINE_PAYLOADS = [
    "",
    "console.log(1)",
    "body{margin:0}",
    "</script><script>alert(1)",
    '{"@context": "https://schema.org"}',
    "\x00",
    " ",
]


def random_string(min_len=0, max_len=20):
    """Generate random ASCII string."""
    length = random.randint(min_len, max_len)
    return "".join(random.choices(string.ascii_letters + string.digits, k=length))


def fuzz_attrs():
    attrs = {}
    for _ in range(random.randint(0, 4)):
        value = random.choice([None, "", random_string(1, 12)])
        attrs[random.choice(ATTRIBUTES)] = value
    return attrs


def fuzz_inline_content():
    strategies = [
        lambda: None,
        lambda: random.choice(INLINE_PAYLOADS),
        lambda: random_string(0, 40),
    ]
    return random.choice(strategies)()


def fuzz_node():
    """Mostly MarkupNodes, sometimes things a misbehaving plugin might add."""
    strategies = [
        lambda: MarkupNode(
            random.choice(TAGS),
            fuzz_attrs(),
            inline_content=fuzz_inline_content(),
            key=random.choice([None, random_string(1, 8)]),
        ),
        lambda: MarkupNode("script", inline_content=random_string(1, 30)),
        lambda: MarkupNode("style", inline_content=random_string(1, 30)),
        lambda: random_string(0, 10),
        lambda: None,
        lambda: {"type": "script", "props": {}},
    ]
    weights = [6, 2, 2, 1, 1, 1]
    return random.choices(strategies, weights=weights)[0]()


def generate_fuzzed_page():
    return PageFragments(
        head=[fuzz_node() for _ in range(random.randint(0, 12))],
        pre_body=[fuzz_node() for _ in range(random.randint(0, 6))],
        post_body=[fuzz_node() for _ in range(random.randint(0, 12))],
    )


def check_slot(before, after, nonce):
    """Return a list of problems with one slot's output."""
    problems = []
    if len(before) != len(after):
        problems.append(f"length changed {len(before)} -> {len(after)}")
        return problems

    def targeted(node):
        return matches(node, "script") or matches(node, "style")

    kept = [node for node in before if not targeted(node)]
    if after[: len(kept)] != kept:
        problems.append("non-matching nodes moved or changed")
    for node in after[len(kept) :]:
        if not targeted(node):
            problems.append(f"untargeted node in annotated tail: {node!r}")
        elif node.attrs.get("nonce") != nonce:
            problems.append(f"missing nonce on {node!r}")
    for node in kept:
        if isinstance(node, MarkupNode) and node.tag_name in {"script", "style"} and node.is_inline:
            problems.append(f"inline node left without nonce: {node!r}")
    return problems


def run_fuzzer(num_tests, seed=None, verbose=False):
    """Run the fuzzer against the nonce pass."""
    if seed is not None:
        random.seed(seed)

    failures = []
    crashes = []
    successes = 0

    print(f"Fuzzing nonce pass with {num_tests} pages...")
    start_time = time.time()

    for i in range(num_tests):
        page = generate_fuzzed_page()
        nonce = random.choice(["", "abc123", random_string(8, 24)])
        before = {name: list(getattr(page, name)) for name in SLOT_NAMES}

        if verbose and i % 100 == 0:
            print(f"  Test {i}/{num_tests}...")

        try:
            on_pre_render_html(f"/page-{i}/", page, {"nonce": nonce})
        except Exception as e:
            crashes.append({"test_num": i, "error": str(e), "traceback": traceback.format_exc()})
            if verbose:
                print(f"  CRASH: Test {i}: {e}")
            continue

        problems = []
        for name in SLOT_NAMES:
            problems.extend(f"{name}: {p}" for p in check_slot(before[name], getattr(page, name), nonce))
        if page.replace_count != dict.fromkeys(SLOT_NAMES, 2):
            problems.append(f"unexpected replace counts {page.replace_count}")

        if problems:
            failures.append({"test_num": i, "problems": problems, "before": before})
        else:
            successes += 1

    elapsed_total = time.time() - start_time

    print(f"\n{'=' * 60}")
    print("FUZZING RESULTS")
    print(f"{'=' * 60}")
    print(f"Total tests:    {num_tests}")
    print(f"Successes:      {successes}")
    print(f"Failures:       {len(failures)}")
    print(f"Crashes:        {len(crashes)}")
    print(f"Total time:     {elapsed_total:.2f}s")

    for failure in failures[:10]:
        print(f"\nTest #{failure['test_num']}:")
        for problem in failure["problems"]:
            print(f"  {problem}")
    for crash in crashes[:10]:
        print(f"\nTest #{crash['test_num']}: {crash['error']}")
        print(crash["traceback"])

    return not failures and not crashes


def main():
    parser = argparse.ArgumentParser(description="Fuzz the inline nonce pass with random fragment lists")
    parser.add_argument(
        "--num-tests", "-n",
        type=int,
        default=1000,
        help="Number of pages to generate (default: 1000)",
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args()
    success = run_fuzzer(args.num_tests, seed=args.seed, verbose=args.verbose)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
