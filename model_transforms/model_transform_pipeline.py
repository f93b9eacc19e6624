"""
model_transform_pipeline.py
Runs post-processing transforms over a generated CodeModel, in order.
"""
from typing import List, Protocol
from class_model import CodeModel

class ModelTransform(Protocol):
    def transform(self, model: CodeModel) -> CodeModel:
        ...

def run_model_transform_pipeline(
    model: CodeModel,
    transforms: List[ModelTransform],
    verbose: bool = False
) -> CodeModel:
    """
    Each transform receives the model returned by the previous one. Transforms mutate the tree in place
    and return it, so the result is the same CodeModel object that was passed in.
    """
    for transform in transforms:
        if verbose:
            print(f"[DEBUG] Running {type(transform).__name__} on namespace '{model.namespace}' ({len(model.types)} types)")
        model = transform.transform(model)
    return model
