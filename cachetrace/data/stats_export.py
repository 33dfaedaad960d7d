"""Statistics, report formatting and exporters.
"""
import csv
import json
from typing import List, Optional, Sequence


class Statistics:
    def __init__(self):
        self.reset()

    def reset(self):
        # counters start from zero
        self.accesses = 0
        self.hits = 0
        self.misses = 0

    def record_access(self, hit: bool):
        # simple counter update: call this for every cache access
        self.accesses += 1
        if hit:
            self.hits += 1
        else:
            self.misses += 1

    @property
    def hit_rate(self):
        return (self.hits / self.accesses) if self.accesses else 0.0

    @property
    def miss_rate(self):
        return (self.misses / self.accesses) if self.accesses else 0.0


def format_report(results: Sequence) -> str:
    """Render the per-configuration summary.

    An empty trace reports 0 accesses and a 0.00% hit rate.
    """
    blocks = []
    for i, r in enumerate(results, start=1):
        blocks.append(
            f"Cache Config {i}: Type = {r.kind}, Policy = {r.policy}\n"
            f"Number of Hits: {r.hits}\n"
            f"Number of Total Accesses: {r.accesses}\n"
            f"Hit Rate: {r.hit_rate * 100:.2f}%\n"
        )
    return "\n".join(blocks)


def _rows(results: Sequence) -> List[dict]:
    return [
        {
            'config': i,
            'type': r.kind,
            'policy': r.policy,
            'hits': r.hits,
            'misses': r.misses,
            'accesses': r.accesses,
            'hit_rate': r.hit_rate,
        }
        for i, r in enumerate(results, start=1)
    ]


def export_chart(fpath: str, results: Sequence, title: Optional[str] = None) -> str:
    """Render per-configuration hit rates as a bar chart using matplotlib.

    The output format follows the file extension (pdf, png, svg...).
    Returns the saved file path.
    """
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    labels = [r.label for r in results]
    rates = [r.hit_rate for r in results]
    fig, ax = plt.subplots(figsize=(8, 3))
    ax.bar(range(len(rates)), rates, color='#FFA500')
    ax.set_xticks(range(len(labels)))
    ax.set_xticklabels(labels, rotation=30, ha='right', fontsize=8)
    ax.set_ylim(0, 1)
    ax.set_ylabel('Hit rate')
    if title:
        ax.set_title(title)
    fig.tight_layout()
    fig.savefig(fpath, dpi=150)
    plt.close(fig)
    return fpath


class Exporter:
    @staticmethod
    def export_stats_csv(path: str, results: Sequence):
        rows = _rows(results)
        with open(path, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=['config', 'type', 'policy', 'hits', 'misses', 'accesses', 'hit_rate'])
            writer.writeheader()
            writer.writerows(rows)
        return path

    @staticmethod
    def export_stats_json(path: str, results: Sequence, seed: Optional[int] = None):
        data = {
            'seed': seed,
            'results': _rows(results),
        }
        with open(path, 'w', encoding='utf-8') as fh:
            json.dump(data, fh, indent=2)
        return path
