from typing import Optional, Protocol


class AppHooks(Protocol):
    """
    Protocol for application hooks used by front ends to follow an analysis run.

    Methods:
        report_step(info, target, reset_counter, plus_step) -> None:
            Report progress of the current analysis stage.
    """
    def report_step(self, info: str = "", target: Optional[int] = None, reset_counter: bool = False, plus_step: int = 1) -> None:
        """
        Report progress messages from the analysis.

        Args:
            info (str): Progress message.
            target (int): Total number of steps expected for the stage.
            reset_counter (bool): Whether to restart the step counter.
            plus_step (int): Number of steps completed since the last report.
        """
        pass
