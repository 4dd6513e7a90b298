from __future__ import annotations
import logging
import random
import sys
from pathlib import Path
import click
from linmotion_quiz.builders import all_builders
from linmotion_quiz.config import DEFAULT_CONFIG_PATH, ConfigError, QuizConfig, load_config
from linmotion_quiz.exporters import discover as discover_exporters, get_exporter
from linmotion_quiz.formatting import OPTION_LABELS
from linmotion_quiz.pipeline import QuizSession, generate_batch, run_stages
from linmotion_quiz.preview import question_lines
from linmotion_quiz.score import ScoreStore
from linmotion_quiz.stats import print_summary


def _config(ctx, **overrides) -> QuizConfig:
    try:
        return ctx.obj["config"].merged(**overrides)
    except ConfigError as e:
        raise click.UsageError(str(e))


def _store(cfg: QuizConfig) -> ScoreStore:
    return ScoreStore(cfg.stats_path, cfg.storage_key)


@click.group()
@click.option("-c", "--config", "config_path", default=DEFAULT_CONFIG_PATH, help="配置文件路径")
@click.option("-v", "--verbose", is_flag=True, help="输出调试日志")
@click.pass_context
def cli(ctx, config_path, verbose):
    """匀速直线运动随机题目生成工具"""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    ctx.ensure_object(dict)
    try:
        ctx.obj["config"] = load_config(config_path)
    except ConfigError as e:
        raise click.UsageError(str(e))


def _filter_options(fn):
    fn = click.option("--family", "families", multiple=True, help="限定场景族 (可多选)")(fn)
    fn = click.option("--answer-type", "answer_types", multiple=True, help="限定答案类型 (可多选)")(fn)
    fn = click.option("--builder", "builders", multiple=True, help="限定构造器 (可多选)")(fn)
    return fn


@cli.command()
@click.option("-n", "--count", default=None, type=int, help="生成题数")
@click.option("--seed", default=None, type=int, help="随机种子 (固定种子可复现)")
@click.option("--test-mode", is_flag=True, help="按注册顺序轮流使用构造器")
@click.option("-f", "--format", "formats", multiple=True, help="导出格式: json/csv/xlsx/docx")
@click.option("-o", "--output-dir", default=None, help="输出目录")
@click.option("--stats/--no-stats", default=True, help="是否显示统计")
@_filter_options
@click.pass_context
def generate(ctx, count, seed, test_mode, formats, output_dir, stats,
             families, answer_types, builders):
    """批量出题并导出"""
    cfg = _config(
        ctx, count=count, seed=seed, test_mode=test_mode or None, formats=formats,
        output_dir=output_dir, families=families, answer_types=answer_types, builders=builders,
    )
    try:
        questions = generate_batch(cfg)
    except ConfigError as e:
        raise click.UsageError(str(e))

    click.echo(f"🧮 已生成 {len(questions)} 道题")
    if stats:
        print_summary(questions)

    discover_exporters()
    base_name = Path(cfg.output_dir) / "questions"
    failed = 0
    for fmt in cfg.formats:
        click.echo(f"📤 导出 {fmt.upper()}...")
        try:
            get_exporter(fmt).export(questions, base_name)
        except KeyError as e:
            click.echo(f"[ERROR] {e}")
            failed += 1
        except OSError as e:
            click.echo(f"[ERROR] 导出 {fmt} 失败: {e}")
            failed += 1

    if failed:
        sys.exit(1)
    click.echo(f"✅ 完成! 共 {len(questions)} 题")


@cli.command()
@click.option("--seed", default=None, type=int, help="随机种子")
@click.option("--sequence", default=1, type=int, help="题目序号 (决定显示单位)")
@click.option("--builder", "builder_name", default=None, help="指定构造器，不填则随机")
@click.pass_context
def preview(ctx, seed, sequence, builder_name):
    """预览一道题 (含答案与解析)"""
    if sequence < 1:
        raise click.BadParameter("序号从 1 开始", param_hint="--sequence")
    cfg = _config(ctx, seed=seed)
    rng = random.Random(cfg.seed)
    entries = {e.name: e for e in all_builders()}
    if builder_name:
        if builder_name not in entries:
            raise click.UsageError(f"未知构造器: {builder_name}")
        entry = entries[builder_name]
    else:
        entry = rng.choice(list(entries.values()))
    question = run_stages(entry.build(rng), sequence, rng)
    for line in question_lines(question, show_answer=True):
        click.echo(line)


@cli.command(name="builders")
def list_builders():
    """列出所有题目构造器"""
    entries = all_builders()
    for i, e in enumerate(entries, 1):
        click.echo(f"  {i:>2}. {e.name:<22} {e.family:<14} {e.answer_type}")
    click.echo(f"共 {len(entries)} 个构造器")


@cli.command()
@click.option("--seed", default=None, type=int, help="随机种子")
@click.option("--test-mode", is_flag=True, help="按注册顺序轮流出题")
@click.option("-n", "--count", default=None, type=int, help="答题数，不填则一直出题")
@_filter_options
@click.pass_context
def play(ctx, seed, test_mode, count, families, answer_types, builders):
    """终端答题，成绩自动保存"""
    cfg = _config(
        ctx, seed=seed, test_mode=test_mode or None,
        families=families, answer_types=answer_types, builders=builders,
    )
    try:
        session = QuizSession(cfg, _store(cfg))
    except ConfigError as e:
        raise click.UsageError(str(e))

    click.echo(f"⬆️ {session.state.correct_count}   🔥 {session.state.current_streak}")
    asked = 0
    while count is None or asked < count:
        q = session.next_question()
        asked += 1
        click.echo()
        for line in question_lines(q):
            click.echo(line)
        letters = OPTION_LABELS[:len(q.options)]
        choice = click.prompt(
            "选择 (q 退出)",
            type=click.Choice(list(letters) + list(letters.lower()) + ["q"]),
            show_choices=False,
        )
        if choice == "q":
            break
        ok = session.answer(letters.index(choice.upper()))
        verdict = "✅ תשובה נכונה" if ok else "⚠️ תשובה לא נכונה"
        click.echo(f"{verdict}. {q.explanation}")
        click.echo(f"⬆️ {session.state.correct_count}   🔥 {session.state.current_streak}")


@cli.command()
@click.option("--reset", is_flag=True, help="清零答对数与连对数")
@click.pass_context
def score(ctx, reset):
    """查看或重置已保存的成绩"""
    cfg = ctx.obj["config"]
    store = _store(cfg)
    if reset:
        store.clear()
        click.echo("成绩已清零")
        return
    correct, streak = store.load()
    click.echo(f"答对: {correct}  连对: {streak}")


@cli.command()
@click.option("--host", default=None, help="监听地址")
@click.option("--port", default=None, type=int, help="端口")
@click.option("--seed", default=None, type=int, help="随机种子")
@click.option("--test-mode", is_flag=True, help="按注册顺序轮流出题")
@click.pass_context
def serve(ctx, host, port, seed, test_mode):
    """启动答题 JSON API"""
    from linmotion_quiz.server import start_server
    cfg = _config(ctx, host=host, port=port, seed=seed, test_mode=test_mode or None)
    start_server(cfg)


def main():
    cli()


if __name__ == "__main__":
    main()
