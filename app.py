"""
Stress Level Detector
Web application for estimating stress levels in free text (English, Hindi, Tamil).
"""
import os, sys, json, logging
from datetime import datetime
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from shiny import App, ui, render, reactive

from stress_detector import config
from stress_detector.exceptions import AnalysisError, ConfigError
from stress_detector.gemini_client import GeminiClient
from stress_detector.keyword_highlighter import highlight
from stress_detector.report_renderer import render as render_report
from stress_detector.response_contract import ClassificationLevel
from stress_detector.stress_analyzer import StressAnalyzer, describe_failure
from stress_detector.trend_tracker import TrendTracker

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

LEVEL_STYLES = {
    ClassificationLevel.LOW: {"color": "#28a745", "background": "#d4edda", "bar": "30%"},
    ClassificationLevel.MEDIUM: {"color": "#b8860b", "background": "#fff3cd", "bar": "60%"},
    ClassificationLevel.HIGH: {"color": "#dc3545", "background": "#f8d7da", "bar": "100%"},
}


class RequestSequence:
    """
    Numbers analysis requests within a session.

    Only the most recent request may publish its reply; older replies are
    dropped on arrival. `busy` is True while the most recent request is
    still waiting on the oracle.
    """

    def __init__(self):
        self.latest = 0
        self._pending = set()

    def start(self) -> int:
        self.latest += 1
        self._pending.add(self.latest)
        return self.latest

    def finish(self, seq: int) -> bool:
        """Mark `seq` done; True when it is still the most recent request."""
        self._pending.discard(seq)
        return seq == self.latest

    @property
    def busy(self) -> bool:
        return self.latest in self._pending


app_ui = ui.page_fluid(
    ui.tags.head(
        ui.tags.style("""
            .result-card { padding:18px; margin:12px 0; border-radius:8px; border-left:4px solid #007bff; background:#f8f9fa; }
            .score-box { padding:10px; border-radius:6px; background:#fff; border:1px solid #dee2e6; text-align:center; }
            .score-bar { height:16px; border-radius:4px; }
            .kw { padding:0 3px; border-radius:3px; }
            .tier-1 { background:#fee2e2; color:#b91c1c; }
            .tier-2 { background:#fecaca; color:#991b1b; }
            .tier-3 { background:#fca5a5; color:#7f1d1d; }
            .tier-4 { background:#f87171; color:#fff; }
            .tier-5 { background:#ef4444; color:#fff; }
            .trend { display:flex; align-items:flex-end; gap:10px; height:110px; padding:8px; background:#fff; border-radius:6px; }
            .trend-slot { flex:1; display:flex; flex-direction:column; justify-content:flex-end; height:100%; text-align:center; }
        """)
    ),
    ui.panel_title("Stress Level Detector", "Stress Level Detector"),
    ui.layout_sidebar(
        ui.sidebar(
            ui.h4("Input"),
            ui.input_text_area(
                "content_input",
                "Type any sentence or paragraph:",
                rows=10,
                placeholder="Type any sentence or paragraph here..."
            ),
            ui.input_action_button("analyze_btn", "Check Stress Level", class_="btn-primary btn-lg w-100"),
            ui.br(), ui.hr(),
            ui.tags.div(ui.output_ui("status_display"), style="margin-top:10px;"),
            width=350
        ),
        ui.navset_tab(
            ui.nav_panel("Result", ui.div(ui.output_ui("result_ui"), ui.output_ui("trend_ui"))),
            ui.nav_panel("Export", ui.div(
                ui.h3("Export Analysis"),
                ui.download_button("download_pdf", "Download PDF Report", class_="btn-success"), ui.br(), ui.br(),
                ui.download_button("download_json", "Download JSON", class_="btn-info"), ui.br(), ui.br(),
                ui.download_button("download_trend", "Download Trend CSV", class_="btn-secondary"), ui.br(), ui.br(),
                ui.output_text("export_info")
            ))
        )
    )
)


# Server Logic
def server(input, output, session):
    analysis_result = reactive.Value(None)
    analyzed_text = reactive.Value("")
    processing = reactive.Value(False)
    error_message = reactive.Value(None)
    trend_version = reactive.Value(0)

    trend = TrendTracker()
    request_seq = RequestSequence()

    analyzer = None

    def get_analyzer():
        nonlocal analyzer
        if analyzer is None:
            try:
                analyzer = StressAnalyzer(GeminiClient())
            except ConfigError as e:
                error_message.set(str(e))
                return None
        return analyzer

    @output
    @render.ui
    def status_display():
        """Render status - always returns visible content."""
        base_style = "padding: 12px; background: #f8f9fa; border-radius: 4px; font-weight: 500; min-height: 50px; border: 1px solid #dee2e6;"

        if error_message.get():
            return ui.div(
                ui.tags.strong("Error: ", style="color: #dc3545;"),
                ui.span(str(error_message.get()), style="color: #dc3545;"),
                style=base_style
            )

        if processing.get():
            return ui.div(
                ui.tags.strong("Analyzing...", style="color: #0066cc; font-size: 1.05em;"),
                style=base_style + " background: #e7f3ff;"
            )

        if analysis_result.get():
            return ui.div(
                ui.tags.strong("✓ Analysis complete", style="color: #28a745; font-size: 1.05em;"),
                style=base_style + " background: #d4edda;"
            )

        if not config.get_api_key():
            return ui.div(
                ui.tags.strong(f"⚠ {config.API_KEY_ENV} not set", style="color: #856404; font-size: 1.05em;"),
                style=base_style + " background: #fff3cd;"
            )

        return ui.div(
            ui.tags.strong("Ready to analyze text", style="color: #6c757d; font-size: 1.05em;"),
            style=base_style
        )

    @reactive.Effect
    @reactive.event(input.analyze_btn)
    async def run_analysis():
        text = input.content_input() or ""
        seq = request_seq.start()

        error_message.set(None)
        if not text.strip():
            request_seq.finish(seq)
            processing.set(request_seq.busy)
            error_message.set("Please enter some text to analyze.")
            return

        current = get_analyzer()
        if current is None:
            request_seq.finish(seq)
            processing.set(request_seq.busy)
            return

        processing.set(request_seq.busy)
        analysis_result.set(None)
        await reactive.flush()

        try:
            result = await current.analyze_async(text)
        except AnalysisError as e:
            is_current = request_seq.finish(seq)
            processing.set(request_seq.busy)
            if is_current:
                failure = describe_failure(e)
                logger.error("Analysis failed [%s]: %s", failure["kind"], failure["detail"])
                error_message.set(failure["message"])
            return

        is_current = request_seq.finish(seq)
        processing.set(request_seq.busy)
        if not is_current:
            logger.info("Discarding late result for superseded request %s", seq)
            return

        analysis_result.set(result)
        analyzed_text.set(text)
        trend.append(result.level)
        trend_version.set(trend_version.get() + 1)

    @output
    @render.ui
    def result_ui():
        result = analysis_result.get()
        if not result:
            return ui.p("Submit some text to see its stress analysis.", style="color:#6c757d;")

        styles = LEVEL_STYLES[result.level]
        reasoning = result.reasoning

        explanation = []
        for segment in highlight(result.explanation, result.keywords):
            if segment.tier is None:
                explanation.append(segment.text)
            else:
                explanation.append(ui.tags.span(segment.text, class_=f"kw tier-{segment.tier}"))

        sections = [
            ui.h3(result.level.value, style=f"color:{styles['color']}; background:{styles['background']}; display:inline-block; padding:6px 14px; border-radius:16px;"),
            ui.h4("Confidence Score"),
            ui.div(
                ui.div(class_="score-bar", style=f"width:{result.confidence}%; background:{styles['color']};"),
                style="background:#e9ecef; border-radius:4px;"
            ),
            ui.p(f"{result.confidence}%", style="text-align:right; color:#666;"),
            ui.h4("Detailed Reasoning"),
            ui.layout_columns(
                ui.div(ui.div("Negative Word Score", style="color:#666;"), ui.h3(str(reasoning.negative_word_score)), class_="score-box"),
                ui.div(ui.div("Emotional Tone", style="color:#666;"), ui.h3(str(reasoning.emotional_tone)), class_="score-box"),
                ui.div(ui.div("Cognitive Overload", style="color:#666;"), ui.h3(str(reasoning.cognitive_overload_index)), class_="score-box"),
            ),
            ui.h4("Why this stress level was predicted?", style="margin-top:14px;"),
            ui.p(*explanation, style="line-height:1.7;"),
        ]

        if result.level is ClassificationLevel.HIGH and result.suggestions:
            sections.append(ui.h4("Suggestions for Reducing Stress"))
            sections.append(ui.tags.ul(*[ui.tags.li(s) for s in result.suggestions]))

        return ui.div(*sections, class_="result-card", style=f"border-left-color:{styles['color']};")

    @output
    @render.ui
    def trend_ui():
        trend_version.get()
        if len(trend) == 0:
            return ui.HTML("")

        slots = []
        for level in trend.snapshot():
            if level is None:
                slots.append(ui.div(
                    ui.tags.small(""),
                    ui.div(style="height:5%; background:#e9ecef; border-radius:4px 4px 0 0;", title="No data"),
                    class_="trend-slot"
                ))
                continue
            styles = LEVEL_STYLES[level]
            slots.append(ui.div(
                ui.tags.small(level.short_label),
                ui.div(style=f"height:{styles['bar']}; background:{styles['color']}; border-radius:4px 4px 0 0;", title=level.value),
                class_="trend-slot"
            ))

        return ui.div(
            ui.h4("Recent Stress Trend (Oldest to Newest)", style="text-align:center;"),
            ui.div(*slots, class_="trend"),
            style="margin-top:18px;"
        )

    # Export handlers
    @output
    @render.text
    def export_info():
        if not analysis_result.get():
            return "No analysis to export. Run an analysis first."
        return "Analysis ready for export."

    @render.download(filename=config.REPORT_FILENAME)
    def download_pdf():
        result = analysis_result.get()
        if not result:
            return
        yield render_report(analyzed_text.get(), result, generated_at=datetime.now())

    @render.download(filename="stress_analysis.json")
    def download_json():
        result = analysis_result.get()
        if not result:
            return
        yield json.dumps({"text": analyzed_text.get(), "result": result.to_dict()}, indent=2, ensure_ascii=False)

    @render.download(filename="stress_trend.csv")
    def download_trend():
        trend_version.get()
        yield trend.to_frame().to_csv(index=False)


# Create app
app = App(app_ui, server)


if __name__ == "__main__":
    print("Run with: shiny run app.py")
    print(f"Make sure {config.API_KEY_ENV} is set in your .env file or environment.")
