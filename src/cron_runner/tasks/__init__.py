"""
Task subsystem.

Components:
- task_models.py: data structures (RunResult, RunStatus, OverlapPolicy)
- schedule.py: five-field cron expressions evaluated with APScheduler
- task_runner.py: runs the external command and logs its outcome
- task_scheduler.py: the loop that fires the runner on every tick
"""
