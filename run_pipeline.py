"""
Pipeline orchestrator for the NHIS heart-attack SVM analysis.

Executes the complete analysis: preprocessing → grid-search training →
evaluation → plots.

Usage:
    python run_pipeline.py                         # Full analysis with config defaults
    python run_pipeline.py --data-path extract.csv # Use another extract
    python run_pipeline.py --kernels linear rbf    # Fit a subset of kernels
    python run_pipeline.py --cv-folds 5 --seed 7   # Custom CV / seed
    python run_pipeline.py --no-plots              # Console report only
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from heartsvm import config
from heartsvm.main import run_preprocessing_pipeline
from heartsvm.training_pipeline.tune_grid import run_model_training
from heartsvm.training_pipeline.evaluation import (
    evaluate_all,
    create_comparison_table,
    render_report_plots
)

logger = logging.getLogger(__name__)


def run_full_pipeline(
    data_path: Optional[str] = None,
    train_size: int = None,
    random_state: int = None,
    cv_folds: int = None,
    kernels: Optional[List[str]] = None,
    plots_dir: Optional[Path] = None,
    make_plots: bool = True
) -> None:
    """
    Execute complete analysis pipeline.

    Stages:
    1. Preprocessing (load, filter, clean, recode)
    2. Training (fixed-size split + grid search per kernel)
    3. Evaluation (test error, confusion matrices, ROC)
    4. Plots (optional)

    Args:
        data_path: Raw extract path. If None, uses config.RAW_DATA_PATH.
        train_size: Training sample size. If None, uses config.TRAIN_SIZE.
        random_state: Seed. If None, uses config.RANDOM_STATE.
        cv_folds: Number of CV folds. If None, uses config.CV_FOLDS.
        kernels: Kernel families. If None, uses config.KERNELS.
        plots_dir: Plot output directory. If None, uses config.REPORTS_DIR.
        make_plots: Render plots after evaluation.
    """
    logger.info("=" * 80)
    logger.info("NHIS HEART-ATTACK SVM PIPELINE")
    logger.info("=" * 80)

    # Stage 1: Preprocessing
    logger.info("\n[Stage 1/4] PREPROCESSING")
    logger.info(f"Input: {data_path or config.RAW_DATA_PATH}")
    try:
        df = run_preprocessing_pipeline(data_path)
    except Exception as e:
        logger.error(f"❌ Preprocessing failed: {e}")
        sys.exit(1)

    # Stage 2: Training
    logger.info("\n[Stage 2/4] GRID-SEARCH TRAINING")
    logger.info(f"Kernels: {kernels or config.KERNELS}")
    logger.info(f"Train size: {train_size or config.TRAIN_SIZE:,}")
    logger.info(f"CV folds: {cv_folds or config.CV_FOLDS}")
    try:
        models, train_df, test_df = run_model_training(
            df,
            train_size=train_size,
            random_state=random_state,
            kernels=kernels,
            cv_folds=cv_folds
        )
    except Exception as e:
        logger.error(f"❌ Training failed: {e}")
        sys.exit(1)

    # Stage 3: Evaluation
    logger.info("\n[Stage 3/4] EVALUATION")
    results = evaluate_all(models, test_df)
    create_comparison_table(models, results)

    # Stage 4: Plots
    logger.info("\n[Stage 4/4] PLOTS")
    if make_plots:
        output_dir = plots_dir or config.REPORTS_DIR
        render_report_plots(results, test_df, output_dir)
        logger.info(f"✓ Plots written to: {output_dir}")
    else:
        logger.info("Skipping plots (--no-plots)")

    logger.info("\n" + "=" * 80)
    logger.info("✓ PIPELINE COMPLETE")
    logger.info("=" * 80)


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Run the NHIS heart-attack SVM analysis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Full analysis with the configured extract
  python run_pipeline.py

  # Quick run with fewer folds and two kernels
  python run_pipeline.py --cv-folds 3 --kernels linear rbf

  # Console report only
  python run_pipeline.py --no-plots
        """
    )
    parser.add_argument(
        '--data-path',
        type=str,
        default=None,
        help=f'Raw survey extract (default: {config.RAW_DATA_PATH})'
    )
    parser.add_argument(
        '--train-size',
        type=int,
        default=None,
        help=f'Training sample size (default: {config.TRAIN_SIZE})'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help=f'Random seed for split and CV folds (default: {config.RANDOM_STATE})'
    )
    parser.add_argument(
        '--cv-folds',
        type=int,
        default=None,
        help=f'Number of CV folds (default: {config.CV_FOLDS})'
    )
    parser.add_argument(
        '--kernels',
        nargs='+',
        choices=config.KERNELS,
        default=None,
        help='Kernel families to fit (default: all)'
    )
    parser.add_argument(
        '--plots-dir',
        type=Path,
        default=None,
        help=f'Directory for plots (default: {config.REPORTS_DIR})'
    )
    parser.add_argument(
        '--no-plots',
        action='store_true',
        help='Skip rendering plots'
    )

    args = parser.parse_args()

    run_full_pipeline(
        data_path=args.data_path,
        train_size=args.train_size,
        random_state=args.seed,
        cv_folds=args.cv_folds,
        kernels=args.kernels,
        plots_dir=args.plots_dir,
        make_plots=not args.no_plots
    )


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    main()
