"""Statistics and exporter.
"""
import csv
import json
from typing import Dict, List, Optional


class Statistics:
    def __init__(self, sample_every: Optional[int] = None):
        # hit-rate history gets one point per `sample_every` accesses; None keeps no history
        self.sample_every = None if sample_every is None else max(1, int(sample_every))
        self.reset()

    def reset(self):
        # counters start from zero
        self.accesses = 0
        self.hits = 0
        self.misses = 0
        self.evictions = 0
        self.hit_rate_history: List[float] = []

    def record(self, outcome):
        # call this for every cache access
        self.accesses += 1
        if outcome.is_hit:
            self.hits += 1
        else:
            self.misses += 1
        if outcome.is_eviction:
            self.evictions += 1
        if self.sample_every and self.accesses % self.sample_every == 0:
            self.hit_rate_history.append(self.hit_rate)

    @property
    def hit_rate(self):
        return (self.hits / self.accesses) if self.accesses else 0.0

    @property
    def miss_rate(self):
        return (self.misses / self.accesses) if self.accesses else 0.0

    def as_dict(self) -> Dict[str, float]:
        return {
            'accesses': self.accesses,
            'hits': self.hits,
            'misses': self.misses,
            'evictions': self.evictions,
            'hit_rate': self.hit_rate,
            'miss_rate': self.miss_rate,
        }

    def summary(self) -> str:
        return f"hits:{self.hits} misses:{self.misses} evictions:{self.evictions}"


class Exporter:
    FIELDS = ['accesses', 'hits', 'misses', 'evictions', 'hit_rate', 'miss_rate']

    @staticmethod
    def export_stats_csv(path: str, stats: Statistics) -> str:
        row = stats.as_dict()
        with open(path, 'w', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(Exporter.FIELDS)
            writer.writerow([row[k] for k in Exporter.FIELDS])
        return path

    @staticmethod
    def export_stats_json(path: str, stats: Statistics, config: Optional[Dict[str, int]] = None) -> str:
        """Export totals and the hit-rate history to a JSON file. Returns the path."""
        data = {
            'stats': stats.as_dict(),
            'hit_rate_history': list(stats.hit_rate_history),
        }
        if config is not None:
            data['config'] = dict(config)
        with open(path, 'w', encoding='utf-8') as fh:
            json.dump(data, fh, indent=2)
        return path

    @staticmethod
    def export_chart_pdf(path: str, stats: Statistics, title: Optional[str] = None) -> str:
        """Render the hit-rate history to a PDF using matplotlib and save it.
        """
        import matplotlib
        matplotlib.use('Agg')
        import matplotlib.pyplot as plt

        data = list(stats.hit_rate_history) or [0]
        step = stats.sample_every or 1
        xs = [(i + 1) * step for i in range(len(data))]
        fig, ax = plt.subplots(figsize=(6, 2))
        try:
            ax.plot(xs, data, color='#FFA500', linewidth=2)
            ax.fill_between(xs, data, color='#FFA500', alpha=0.1)
            ax.set_ylim(0, 1)
            ax.set_xlabel('Accesses')
            ax.set_ylabel('Hit rate')
            if title:
                ax.set_title(title)
            ax.grid(False)
            fig.tight_layout()
            fig.savefig(path, format='pdf', dpi=150)
        finally:
            plt.close(fig)
        return path
