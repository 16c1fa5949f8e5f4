#!/usr/bin/env python3
import subprocess, sys
from pathlib import Path

def run(cmd):
    print("Running:", cmd)
    r = subprocess.run(cmd, shell=True)
    if r.returncode != 0:
        sys.exit(r.returncode)

def main():
    Path("results").mkdir(exist_ok=True)
    run("python -m basin.experiments.runner --input inputs/small.txt inputs/example.txt --algo both --out results/examples.csv")
    run("python -m basin.experiments.runner --input inputs/example.txt --algo a --heuristic zero --quiet --out results/example_ucs.csv")
    run("python -m basin.experiments.summarize results/examples.csv results/example_ucs.csv --save results/plots")

if __name__ == "__main__":
    main()
