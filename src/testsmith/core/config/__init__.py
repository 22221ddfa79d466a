from .main import AIConfig, GenerationConfig, ProjectConfig, TestsmithConfig

__all__ = ["AIConfig", "GenerationConfig", "ProjectConfig", "TestsmithConfig"]
