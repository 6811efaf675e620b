import asyncio
from datetime import datetime, timezone
from itertools import islice

from cron_scheduler import BackendFactory, format_expression, iter_occurrences, parse
from cron_scheduler.domain import ScheduledEvent, ScheduledJob
from cron_scheduler.backends import InProcessBackend
from cron_scheduler.executors import JobExecutor


class PrintExecutor(JobExecutor):
    async def async_execute(self, job: ScheduledJob, event: ScheduledEvent) -> None:
        fired = datetime.fromtimestamp(event.scheduled_time / 1000, tz=timezone.utc)
        print(f"Job {job.name} fired for {fired.isoformat()}")


def show_schedule(text: str) -> None:
    expression = parse(text)
    print(f"{text!r} -> {format_expression(expression)}")
    for occurrence in islice(iter_occurrences(expression, datetime.now(timezone.utc)), 3):
        print(f"  {occurrence.isoformat()}")


async def main():
    show_schedule("0 0 15 * mon")
    show_schedule("@weekly")

    # The platform backend edits the real crontab / LaunchAgents / Task Scheduler.
    backend = BackendFactory().create()
    print(f"Jobs managed by {type(backend).__name__}: {await backend.list_jobs()}")

    in_process = InProcessBackend(PrintExecutor())
    await in_process.start()
    await in_process.install("heartbeat", "* * * * *", "true")
    print("Waiting for the next minute...")
    await asyncio.sleep(65)
    await in_process.stop()

if __name__ == "__main__":
    asyncio.run(main())
