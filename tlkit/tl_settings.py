# tlkit/tl_settings.py


class Settings:

    def __init__(self):
        self.sweep_points: int = 201        # samples per frequency / distance sweep
        self.time_points: int = 500         # samples per transient time axis
        self.max_vswr: float = 2.0          # bandwidth criterion for λ/4 designs
        self.num_bounces: int = 10          # bounce events listed by default
        self.stub_tolerance: float = 0.05   # |Γ| below which a stub design counts as matched
        self.figure_dpi: int = 120


DEFAULT_SETTINGS = Settings()
