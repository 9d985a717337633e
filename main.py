# main.py
import logging

import matplotlib.pyplot as plt

from taskboard.factory import make_rng
from taskboard.models import AUTO, BoardPrefs
from taskboard.scheduler import BoardSession, summarize
from taskboard.scoring import day_load_frame, schedule_frame
from taskboard.storage import MemoryStore


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    # Manual board: fill each day from the pending pool, highest priority first
    session = BoardSession(MemoryStore(), BoardPrefs(task_count=30, seed=7))
    session.regenerate()

    for w_idx, week in enumerate(session.board.schedule):
        for d_idx, _ in enumerate(week.days):
            while True:
                eligible = session.eligible(w_idx, d_idx)
                if not eligible:
                    break
                session.assign(w_idx, d_idx, eligible[0].id)

    print("=== Manual board ===")
    print(schedule_frame(session.board.schedule))
    print(summarize(session.board))

    # Auto board: greedy packing, may overflow onto the last Friday
    auto = BoardSession(MemoryStore(), BoardPrefs(task_count=35, mode=AUTO))
    auto.regenerate(make_rng(11))

    print("=== Auto board ===")
    loads = day_load_frame(auto.board.schedule)
    print(loads)
    print(summarize(auto.board))

    # Plot daily load against capacity
    labels = "W" + loads["week"].astype(str) + " " + loads["day"].str[:3]
    plt.figure(figsize=(10, 3))
    plt.bar(labels, loads["used_hours"],
            color=["#d62728" if o else "#2ca02c" for o in loads["overloaded"]])
    plt.plot(labels, loads["capacity_hours"], color="#7f7f7f")
    plt.title("Scheduled Hours per Day")
    plt.xlabel("Day")
    plt.ylabel("Hours")
    plt.xticks(rotation=90)
    plt.tight_layout()
    plt.show()


if __name__ == "__main__":
    main()
