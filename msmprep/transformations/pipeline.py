"""Sequential composition of transformers."""

from __future__ import annotations

from typing import Any

import pandas as pd

from .base import TransformationContext, TransformationResult, TransformerPort


class TransformationPipeline:
    """Runs transformers in order, feeding each one the previous output.

    Each applied transformer's result metadata is added to the context
    under the transformer's class name for the ones that follow.

    Transformers whose ``can_transform`` is false are skipped. A failing
    transformer stops the pipeline and the last good table is returned
    together with the errors; with ``fail_safe`` the failure is recorded
    and the remaining transformers run on the last good table.

    Example:
        >>> pipeline = TransformationPipeline()
        >>> pipeline.add_transformer(AugmentTransformer()).add_transformer(
        ...     PolishTransformer(keep="last")
        ... )
        >>> result = pipeline.execute(episodes, TransformationContext(roles=roles))
        >>> result.metadata["applied_transformers"][0]["output_rows"]
    """

    def __init__(self, fail_safe: bool = False):
        self.transformers: list[TransformerPort] = []
        self.fail_safe = fail_safe

    def add_transformer(self, transformer: TransformerPort) -> TransformationPipeline:
        self.transformers.append(transformer)
        return self

    def execute(
        self, df: pd.DataFrame, context: TransformationContext
    ) -> TransformationResult:
        if not self.transformers:
            return TransformationResult(
                data=df,
                applied=False,
                message="Pipeline is empty (no transformers registered)",
            )

        current = df
        applied: list[dict[str, Any]] = []
        skipped: list[str] = []
        warnings: list[str] = []
        errors: list[str] = []

        def stopped(name: str, reason: str) -> TransformationResult:
            return TransformationResult(
                data=current,
                applied=True,
                message=f"Pipeline stopped: {name} {reason}",
                warnings=warnings,
                errors=errors,
                metadata={
                    "input_rows": len(df),
                    "output_rows": len(current),
                    "applied_transformers": applied,
                    "skipped_transformers": skipped,
                    "stopped_at": name,
                },
            )

        for transformer in self.transformers:
            name = transformer.__class__.__name__
            if not transformer.can_transform(current, context.roles):
                skipped.append(name)
                continue

            try:
                result = transformer.transform(current, context)
            except Exception as e:
                errors.append(f"{name}: {e}")
                if not self.fail_safe:
                    return stopped(name, "raised an error")
                warnings.append(f"{name}: Caught error, continuing (fail-safe mode)")
                continue

            if not result.applied:
                skipped.append(name)
                continue

            applied.append(
                {
                    "name": name,
                    "input_rows": len(current),
                    "output_rows": len(result.data),
                    "message": result.message,
                    "metadata": result.metadata,
                }
            )
            warnings.extend(f"{name}: {w}" for w in result.warnings)
            errors.extend(f"{name}: {e}" for e in result.errors)

            if result.success:
                current = result.data
                context = context.with_metadata(**{name: result.metadata})
            elif self.fail_safe:
                warnings.append(
                    f"{name}: Transformation failed but continuing (fail-safe mode)"
                )
            else:
                return stopped(name, "failed")

        if not applied:
            message = "No transformers were applicable"
        else:
            names = ", ".join(t["name"] for t in applied)
            plural = "transformer" if len(applied) == 1 else "transformers"
            message = f"Applied {len(applied)} {plural}: {names}"

        return TransformationResult(
            data=current,
            applied=bool(applied),
            message=message,
            warnings=warnings,
            errors=errors,
            metadata={
                "input_rows": len(df),
                "output_rows": len(current),
                "applied_transformers": applied,
                "skipped_transformers": skipped,
                "transformers_count": len(self.transformers),
            },
        )

    def clear(self) -> None:
        self.transformers.clear()

    def __len__(self) -> int:
        return len(self.transformers)

    def __repr__(self) -> str:
        names = [t.__class__.__name__ for t in self.transformers]
        return f"TransformationPipeline({names}, fail_safe={self.fail_safe})"
