from pathlib import Path

import matplotlib.dates as mdates
import matplotlib.pyplot as plt
from matplotlib import ticker

from core.reporting.contexts import SpendChartContext


class SpendChartRenderer:
    """Cumulative spend against the total budget line."""

    def render(self, ctx: SpendChartContext, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)

        fig, ax = plt.subplots(figsize=(9, 3.5))
        if ctx.points:
            xs = [p[0] for p in ctx.points]
            ys = [p[1] for p in ctx.points]
            ax.step(xs, ys, where="post", label="Cost to date", color="tab:blue")
            ax.scatter(xs, ys, s=12, color="tab:blue")
            if ctx.end_date and ctx.projected_cost_at_completion is not None:
                ax.plot(
                    [xs[-1], ctx.end_date],
                    [ys[-1], ctx.projected_cost_at_completion],
                    linestyle="--",
                    color="tab:orange",
                    label="Projected",
                )
        else:
            ax.text(0.5, 0.5, "No costs recorded", ha="center", va="center", transform=ax.transAxes)

        ax.axhline(ctx.total_budget, color="tab:red", linewidth=1.0, label="Total budget")
        ax.set_title(f"Spend - {ctx.project_name}")
        ax.set_ylabel(ctx.currency)
        ax.yaxis.set_major_formatter(ticker.FuncFormatter(lambda v, _: f"{v:,.0f}"))
        ax.xaxis.set_major_formatter(mdates.DateFormatter("%Y-%m-%d"))
        ax.legend(loc="upper left")
        ax.grid(True, axis="y", linestyle=":", linewidth=0.6)

        fig.autofmt_xdate()
        fig.tight_layout()
        fig.savefig(output_path, dpi=150)
        plt.close(fig)

        return output_path
