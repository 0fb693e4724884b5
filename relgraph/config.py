from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, ConfigDict, Field

class Settings(BaseSettings):
    """
    Centralized engine settings. Pydantic's BaseSettings will automatically
    load these from environment variables or a .env file.
    """
    # --- Logging ---
    LOG_LEVEL: str = Field("INFO", description="Log level for every relgraph logger.")

    # --- Layout Simulation ---
    LAYOUT_WIDTH: float = Field(800.0, description="Width of the logical simulation canvas.")
    LAYOUT_HEIGHT: float = Field(600.0, description="Height of the logical simulation canvas.")
    LAYOUT_ITERATIONS: int = Field(100, description="Number of force-directed iterations per run.")
    LAYOUT_INITIAL_ALPHA: float = Field(1.0, description="Starting temperature of the simulation.")
    LAYOUT_ALPHA_DECAY: float = Field(0.02, description="Multiplicative cooling applied after every iteration.")
    LAYOUT_MAX_STEP: float = Field(10.0, description="Per-iteration displacement is clamped to alpha * this value.")
    LAYOUT_BOUNDS_MARGIN: float = Field(50.0, description="Nodes are clipped to stay this far inside the canvas.")
    VIEWPORT_PADDING: float = Field(120.0, description="Padding added around the node bounding box.")
    INITIAL_RADIUS_MIN: float = Field(80.0, description="Lower bound of the initial circle radius.")
    INITIAL_RADIUS_MAX: float = Field(150.0, description="Upper bound of the initial circle radius.")
    INITIAL_RADIUS_PER_NODE: float = Field(15.0, description="Initial circle radius grows by this much per node.")

    # --- Caching ---
    GRAPH_CACHE_SIZE: int = Field(32, description="Number of computed graphs kept by a GraphCache.")

    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')


class LayoutConfig(BaseModel):
    """Named constants of the force-directed simulation."""
    model_config = ConfigDict(frozen=True)

    width: float = 800.0
    height: float = 600.0
    iterations: int = 100
    initial_alpha: float = 1.0
    alpha_decay: float = 0.02
    max_step: float = 10.0
    bounds_margin: float = 50.0
    padding: float = 120.0
    initial_radius_min: float = 80.0
    initial_radius_max: float = 150.0
    initial_radius_per_node: float = 15.0

    @property
    def center(self):
        return self.width / 2, self.height / 2

    @classmethod
    def from_settings(cls, source: Settings) -> "LayoutConfig":
        return cls(
            width=source.LAYOUT_WIDTH,
            height=source.LAYOUT_HEIGHT,
            iterations=source.LAYOUT_ITERATIONS,
            initial_alpha=source.LAYOUT_INITIAL_ALPHA,
            alpha_decay=source.LAYOUT_ALPHA_DECAY,
            max_step=source.LAYOUT_MAX_STEP,
            bounds_margin=source.LAYOUT_BOUNDS_MARGIN,
            padding=source.VIEWPORT_PADDING,
            initial_radius_min=source.INITIAL_RADIUS_MIN,
            initial_radius_max=source.INITIAL_RADIUS_MAX,
            initial_radius_per_node=source.INITIAL_RADIUS_PER_NODE,
        )

settings = Settings()
