import os

from hypothesis import HealthCheck, settings

# Start coverage in subprocesses when running under `coverage run --parallel`
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()

settings.register_profile(
    "ci", max_examples=500, suppress_health_check=[HealthCheck.too_slow]
)
settings.register_profile("dev", max_examples=50)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
