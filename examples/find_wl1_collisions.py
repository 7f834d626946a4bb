#!/usr/bin/env python3
"""
Enumerate every graph on n vertices and list the 1-WL collision buckets,
with the least k-WL dimension that separates each one.

Usage: python3 find_wl1_collisions.py [n] [k_max]
"""

import sys

from wlcollide import RunConfig, run
from wlcollide.io.report import format_graph_line


n = int(sys.argv[1]) if len(sys.argv) > 1 else 7
k_max = int(sys.argv[2]) if len(sys.argv) > 2 else 3

report = run(RunConfig(n=n, k_max=k_max, processes=4))
print(f"n={n}: {report.class_count} classes, {len(report.collisions())} 1-WL collision buckets")
for bucket in report.collisions():
    print(f"\nbucket {bucket.key[:12]}  separating k = {bucket.separating_k}")
    for cls in bucket.classes:
        print("   ", format_graph_line(cls.representative))
