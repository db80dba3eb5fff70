"""ScholarScribe - Streamlit Web Application (academic writing assistant)"""
import streamlit as st
import logging
from typing import Dict, Optional
from core.document_store import DocumentStore, build_record
from core.errors import (
    ContentParseError,
    DocumentStoreError,
    FormValidationError,
    GenerationError,
)
from core.feature_selector import FeatureSelector
from core.generation_driver import GenerationDriver
from core.llm_client import LLMClient, get_llm_client
from core.models import Section, SectionList, SectionStatus
from core.outline_builder import OutlineBuilder
from prompts.form_options import (
    CITATION_STYLES,
    FEATURE_GROUP_LABELS,
    FEATURE_GROUPS,
    FORM_DEFAULTS,
    LEVELS,
    REFERENCE_TYPES,
    ROLES,
    TOPICS,
    WRITING_TYPES,
    enabled_features,
    merge_form,
    validate_form,
)
from prompts.section_writing import build_previous_context
from utils.draft_cache import DraftCache
from utils.exporters import export_filename, export_latex, export_word_doc
from utils.messages import LANGUAGES, get_message
import config

logger = logging.getLogger(__name__)
logging.basicConfig(level=config.LOG_LEVEL)

# Configure page
st.set_page_config(
    page_title=config.APP_TITLE,
    page_icon="📚",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Custom CSS
st.markdown("""
<style>
.main {
    padding: 2rem;
}
.section-badge {
    font-size: 0.8rem;
    padding: 0.1rem 0.5rem;
    border-radius: 0.5rem;
    background-color: #f0f2f6;
}
</style>
""", unsafe_allow_html=True)

STATUS_ICONS = {
    SectionStatus.PENDING: "⚪",
    SectionStatus.GENERATING: "✍️",
    SectionStatus.REWRITING: "🔁",
    SectionStatus.DONE: "✅",
}

SELECT_OPTIONS = {
    "topic": TOPICS,
    "type": WRITING_TYPES,
    "level": LEVELS,
    "role": ROLES,
    "citationStyle": CITATION_STYLES,
    "referenceType": REFERENCE_TYPES,
}


# ------------------------------------------------------------------
# Session state initialization
# ------------------------------------------------------------------

def _fkey(name: str) -> str:
    """Session-state key of the widget bound to a form option"""
    return f"form_{name}"


def initialize_session():
    """Initialize session state variables"""
    defaults = {
        "view": "landing",
        "writing_window": 1,
        "sections": SectionList(),
        "active_section_id": None,
        "global_error": "",
        "flash": "",
        "auto_selecting": None,
        "confirm_delete_id": None,
        "pending_draft": None,
        "draft_checked": False,
        "language": config.UI_LANGUAGE,
        # Client recreation
        "api_key_stored": config.OPENAI_API_KEY or "",
        "model_stored": config.OPENAI_MODEL,
        "provider_stored": "openai",
        "azure_endpoint_stored": config.AZURE_OPENAI_ENDPOINT or "",
        "azure_api_version_stored": config.AZURE_OPENAI_API_VERSION,
        "azure_base_model_stored": "",
    }
    for key, default in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default

    # Re-assigning keeps form values alive while the form widgets are off screen
    for name, default in FORM_DEFAULTS.items():
        st.session_state[_fkey(name)] = st.session_state.get(_fkey(name), default)

    if not st.session_state.draft_checked:
        st.session_state.draft_checked = True
        snapshot = DraftCache().load()
        if snapshot and len(snapshot.sections) > 0:
            st.session_state.pending_draft = snapshot


def msg(key: str, **kwargs) -> str:
    return get_message(key, st.session_state.get("language", "en"), **kwargs)


def current_form() -> Dict:
    """Collect the form values from the bound widgets"""
    return {name: st.session_state.get(_fkey(name), default) for name, default in FORM_DEFAULTS.items()}


def load_form_into_widgets(form: Dict):
    """Push form values into widget state (only call from callbacks or before rendering)"""
    form = merge_form(form)
    for name, value in form.items():
        options = SELECT_OPTIONS.get(name)
        if options is not None and value not in options:
            value = FORM_DEFAULTS[name]
        st.session_state[_fkey(name)] = value


def reset_edit_widgets():
    """Drop editor widget state so it is rebuilt from the current sections"""
    for key in [k for k in st.session_state.keys() if str(k).startswith("edit_")]:
        del st.session_state[key]


def autosave():
    """Mirror the sections and form to the local snapshot (last write wins)"""
    try:
        DraftCache().save(st.session_state.sections, current_form())
    except Exception as e:
        logger.error(f"Auto-save failed: {e}", exc_info=True)


def get_llm() -> Optional[LLMClient]:
    """Create an LLM client from stored credentials"""
    api_key = st.session_state.get("api_key_stored", "")
    provider = st.session_state.get("provider_stored", "openai")

    if not api_key:
        return None
    if provider == "azure_openai" and not st.session_state.get("azure_endpoint_stored"):
        return None

    try:
        return get_llm_client(
            provider=provider,
            api_key=api_key,
            model=st.session_state.get("model_stored") or None,
            azure_endpoint=st.session_state.get("azure_endpoint_stored") or None,
            api_version=st.session_state.get("azure_api_version_stored") or None,
            base_model=st.session_state.get("azure_base_model_stored") or None,
        )
    except Exception as e:
        logger.error(f"Failed to create LLM client: {e}")
        return None


def check_credentials() -> bool:
    """Report missing credentials; returns True when a client can be built"""
    api_key = st.session_state.api_key_stored
    provider = st.session_state.get("provider_stored", "openai")
    if not api_key:
        st.session_state.global_error = msg("api_key_missing")
        return False
    if provider == "openai" and not api_key.startswith("sk-"):
        st.session_state.global_error = msg("api_key_invalid")
        return False
    if provider == "azure_openai" and not st.session_state.get("azure_endpoint_stored"):
        st.session_state.global_error = msg("azure_endpoint_missing")
        return False
    return True


def set_view(view: str):
    st.session_state.view = view
    st.session_state.global_error = ""
    if view == "writing":
        st.session_state.writing_window = 1


# ------------------------------------------------------------------
# Header & sidebar
# ------------------------------------------------------------------

def display_header():
    """Display application header and navigation"""
    st.markdown(f"# 📚 {config.APP_TITLE}")
    st.markdown(f"**{config.APP_DESCRIPTION}**")

    cols = st.columns(4)
    for col, (view, label) in zip(cols, [
        ("landing", "🏠 Home"),
        ("writing", "✍️ Write"),
        ("library", "📁 Library"),
        ("settings", "⚙️ Settings"),
    ]):
        with col:
            st.button(
                label,
                key=f"nav_{view}",
                on_click=set_view,
                args=(view,),
                use_container_width=True,
                type="primary" if st.session_state.view == view else "secondary",
            )


def setup_sidebar():
    """Setup sidebar configuration"""
    with st.sidebar:
        st.markdown("## ⚙️ Model")

        provider = st.selectbox(
            "LLM Provider",
            ["OpenAI", "Azure OpenAI"],
            index=0 if st.session_state.provider_stored == "openai" else 1,
        )
        provider_key = "openai" if provider == "OpenAI" else "azure_openai"

        api_key = st.text_input(
            "API Key",
            value=st.session_state.api_key_stored,
            type="password",
            help=(
                "Create one at https://platform.openai.com/api-keys"
                if provider_key == "openai"
                else "API key of your Azure OpenAI resource"
            ),
        )

        if provider_key == "openai":
            models = ["gpt-4o", "gpt-4o-mini", "gpt-4.1", "gpt-5", "gpt-5.2"]
            stored = st.session_state.model_stored
            model = st.selectbox(
                "LLM Model",
                models,
                index=models.index(stored) if stored in models else 0,
            )
            st.session_state.azure_endpoint_stored = ""
            st.session_state.azure_base_model_stored = ""
        else:
            azure_endpoint = st.text_input(
                "Azure Endpoint",
                value=st.session_state.azure_endpoint_stored,
                placeholder="https://your-resource.openai.azure.com/",
            )
            model = st.text_input(
                "Deployment Name",
                value=st.session_state.model_stored,
                placeholder="gpt-4o-deployment",
            )
            azure_api_version = st.text_input(
                "API Version",
                value=st.session_state.azure_api_version_stored,
            )
            azure_base_model = st.text_input(
                "Base Model",
                value=st.session_state.azure_base_model_stored,
                help="Actual model behind the deployment (used to detect reasoning models)",
            )
            st.session_state.azure_endpoint_stored = azure_endpoint
            st.session_state.azure_api_version_stored = azure_api_version
            st.session_state.azure_base_model_stored = azure_base_model

        st.session_state.api_key_stored = api_key
        st.session_state.model_stored = model
        st.session_state.provider_stored = provider_key

        sections = st.session_state.sections
        if len(sections) > 0:
            st.markdown("### Draft")
            done = sum(1 for s in sections if s.status == SectionStatus.DONE)
            st.write(f"Sections: {done}/{len(sections)} written")
            st.write(f"Words: {sections.word_count}")


# ------------------------------------------------------------------
# Landing
# ------------------------------------------------------------------

def resume_draft():
    snapshot = st.session_state.pending_draft
    st.session_state.pending_draft = None
    if not snapshot:
        return
    st.session_state.sections = snapshot.sections
    reset_edit_widgets()
    load_form_into_widgets(snapshot.form)
    st.session_state.active_section_id = snapshot.sections.ids[0] if len(snapshot.sections) else None
    st.session_state.view = "writing"
    st.session_state.writing_window = 2
    st.session_state.flash = msg("draft_restored")


def discard_draft():
    st.session_state.pending_draft = None
    DraftCache().clear()


def render_landing():
    """Landing page with draft resume prompt"""
    snapshot = st.session_state.pending_draft
    if snapshot:
        st.info(
            f"An unfinished draft was found: **{snapshot.form.get('title') or 'Untitled'}** "
            f"({len(snapshot.sections)} sections, saved {snapshot.saved_at[:19]})"
        )
        col1, col2 = st.columns(2)
        with col1:
            st.button("↩️ Resume draft", key="resume_draft_btn", on_click=resume_draft)
        with col2:
            st.button("🗑️ Discard draft", key="discard_draft_btn", on_click=discard_draft)

    st.markdown("## Write academic work section by section")
    st.markdown(
        "Describe the work, choose the scholarly features you need, and the "
        "assistant drafts an outline and writes each section in turn. Export "
        "the result to LaTeX or Word, or save it to your library."
    )
    st.button("🚀 Start writing", key="start_btn", on_click=set_view, args=("writing",))


# ------------------------------------------------------------------
# Writing: window 1 (form)
# ------------------------------------------------------------------

def run_auto_select(group_name: str):
    """Callback: ask the model to choose the group's features"""
    st.session_state.global_error = ""
    if not check_credentials():
        return
    llm = get_llm()
    if llm is None:
        st.session_state.global_error = msg("api_key_missing")
        return

    try:
        updated = FeatureSelector(llm).select(current_form(), group_name)
    except FormValidationError:
        st.session_state.global_error = msg("title_required")
        return
    except ContentParseError as e:
        logger.error(f"Auto-select parse error: {e}", exc_info=True)
        st.session_state.global_error = msg("auto_select_parse_failed")
        return
    except GenerationError as e:
        logger.error(f"Auto-select error: {e}", exc_info=True)
        st.session_state.global_error = msg("auto_select_failed")
        return

    for key in FEATURE_GROUPS[group_name]:
        st.session_state[_fkey(key)] = updated[key]


def render_form_window():
    """Window 1: collect the writing options"""
    st.markdown("## 1. Describe the work")

    st.text_input("Title *", key=_fkey("title"))
    col1, col2, col3 = st.columns(3)
    with col1:
        st.selectbox("Subject", TOPICS, key=_fkey("topic"))
        st.selectbox("Role", ROLES, key=_fkey("role"))
        st.checkbox("Writer, critic and reviewer at once", key=_fkey("superRole"))
    with col2:
        st.selectbox("Type", WRITING_TYPES, key=_fkey("type"))
        st.number_input("Pages", min_value=1, max_value=500, step=1, key=_fkey("pages"))
    with col3:
        st.selectbox("Level", LEVELS, key=_fkey("level"))
        st.slider("Temperature (creativity)", 0.0, 1.0, step=0.05, key=_fkey("temperature"))

    with st.expander("References & rigour", expanded=False):
        col1, col2 = st.columns(2)
        with col1:
            st.checkbox("Include references", key=_fkey("includeReferences"))
            st.selectbox("Citation style", CITATION_STYLES, key=_fkey("citationStyle"))
            st.selectbox("Reference type", REFERENCE_TYPES, key=_fkey("referenceType"))
            st.checkbox("Link DOIs", key=_fkey("doiLinking"))
            st.checkbox("Crossref-verifiable citations only", key=_fkey("crossRefCheck"))
        with col2:
            st.checkbox("Thesis / antithesis / synthesis", key=_fkey("dialectic"))
            st.checkbox("Focus on data and statistics", key=_fkey("dataFocus"))
            st.checkbox("Tables for key data", key=_fkey("enableDataViz"))
            st.checkbox("Originality (avoid long quotations)", key=_fkey("plagiarismCheck"))
            st.checkbox("Thesis cover page", key=_fkey("thesisCover"))

    with st.expander("Style, comparison & sources", expanded=False):
        st.text_area("Sample text whose style should be imitated", key=_fkey("styleText"), height=100)
        col1, col2 = st.columns(2)
        with col1:
            st.text_area("Comparison text A", key=_fkey("compareText1"), height=100)
        with col2:
            st.text_area("Comparison text B", key=_fkey("compareText2"), height=100)
        st.text_input("Basis of comparison", key=_fkey("compareBasis"))
        st.text_area(
            "Custom sources (the model will use ONLY these)",
            key=_fkey("customSources"),
            height=100,
        )

    with st.expander("Outline & length", expanded=False):
        st.checkbox("Use my own outline", key=_fkey("useCustomOutline"))
        st.text_area("Outline (one section title per line)", key=_fkey("customOutline"), height=120)
        col1, col2 = st.columns(2)
        with col1:
            st.number_input("Thinking tokens", min_value=0, max_value=64000, step=500, key=_fkey("thinkingTokens"))
        with col2:
            st.number_input("Writing tokens per section", min_value=500, max_value=64000, step=500, key=_fkey("writingTokens"))

    st.markdown("### Advanced features")
    for group_name, keys in FEATURE_GROUPS.items():
        enabled = len(enabled_features(current_form(), group_name))
        with st.expander(f"{FEATURE_GROUP_LABELS[group_name]} ({enabled}/{len(keys)})", expanded=False):
            st.button(
                "✨ Auto-select for my title",
                key=f"auto_select_{group_name}",
                on_click=run_auto_select,
                args=(group_name,),
            )
            cols = st.columns(2)
            for i, key in enumerate(keys):
                with cols[i % 2]:
                    st.checkbox(key, key=_fkey(key))

    st.markdown("---")
    if st.button("➡️ Build outline", key="build_outline_btn", type="primary"):
        build_outline()


def build_outline():
    """Window 1 -> window 2 transition"""
    form = current_form()
    errors = validate_form(form)
    if errors:
        st.session_state.global_error = " ".join(msg(e) for e in errors)
        st.rerun()

    st.session_state.global_error = ""
    custom = form.get("useCustomOutline") and (form.get("customOutline") or "").strip()
    llm = None
    if not custom:
        if not check_credentials():
            st.rerun()
        llm = get_llm()

    with st.spinner("Designing the outline..."):
        try:
            sections = OutlineBuilder(llm).build(form)
        except GenerationError as e:
            logger.error(f"Outline error: {e}", exc_info=True)
            st.session_state.global_error = msg("outline_failed")
            st.rerun()

    st.session_state.sections = sections
    st.session_state.active_section_id = sections.ids[0] if len(sections) else None
    st.session_state.writing_window = 2
    reset_edit_widgets()
    autosave()
    st.rerun()


# ------------------------------------------------------------------
# Writing: window 2 (editor)
# ------------------------------------------------------------------

def _section_label(section: Section) -> str:
    return f"{STATUS_ICONS[section.status]} {section.id}. {section.title}"


def render_editor_window():
    """Window 2: section list, generation and export"""
    sections: SectionList = st.session_state.sections
    form = current_form()

    col_back, col_title = st.columns([1, 5])
    with col_back:
        if st.button("⬅️ Back to form", key="back_to_form_btn"):
            st.session_state.writing_window = 1
            st.rerun()
    with col_title:
        st.markdown(f"## {form.get('title') or 'Untitled'}")

    if len(sections) == 0:
        st.info("No sections yet. Add one below or go back and build an outline.")

    col_list, col_view = st.columns([2, 5])
    with col_list:
        render_section_list(sections)
    with col_view:
        render_active_section(sections, form)

    st.markdown("---")
    render_actions(sections, form)


def render_section_list(sections: SectionList):
    st.markdown("### Sections")
    for section in sections:
        is_active = section.id == st.session_state.active_section_id
        if st.button(
            _section_label(section),
            key=f"view_section_{section.id}",
            use_container_width=True,
            type="primary" if is_active else "secondary",
        ):
            st.session_state.active_section_id = section.id
            st.rerun()

    with st.expander("➕ Add section", expanded=False):
        new_title = st.text_input("Section title", key="new_section_title")
        if st.button("Add", key="add_section_btn") and new_title.strip():
            section = sections.add(new_title)
            st.session_state.active_section_id = section.id
            autosave()
            st.rerun()


def render_active_section(sections: SectionList, form: Dict):
    section = sections.get(st.session_state.active_section_id) if st.session_state.active_section_id else None
    if section is None:
        return

    st.markdown(f"### {section.title}")
    st.caption(f"Status: {section.status.value} | Words: {section.word_count}")

    tab_view, tab_edit = st.tabs(["Preview", "Edit"])
    with tab_view:
        if section.content:
            st.markdown(section.content)
        else:
            st.write("_Not written yet._")

    with tab_edit:
        title = st.text_input("Title", value=section.title, key=f"edit_title_{section.id}")
        content = st.text_area("Content (Markdown)", value=section.content, height=300, key=f"edit_content_{section.id}")
        col1, col2, col3, col4 = st.columns(4)
        with col1:
            if st.button("💾 Save edits", key=f"save_edit_{section.id}"):
                sections.rename(section.id, title)
                section.content = content
                if content.strip() and section.status == SectionStatus.PENDING:
                    section.status = SectionStatus.DONE
                autosave()
                st.rerun()
        with col2:
            if st.button("⬆️ Up", key=f"move_up_{section.id}"):
                sections.move(section.id, -1)
                autosave()
                st.rerun()
        with col3:
            if st.button("⬇️ Down", key=f"move_down_{section.id}"):
                sections.move(section.id, 1)
                autosave()
                st.rerun()
        with col4:
            if st.button("🗑️ Remove", key=f"remove_{section.id}"):
                index = sections.index_of(section.id)
                sections.remove(section.id)
                remaining = sections.ids
                st.session_state.active_section_id = (
                    remaining[min(index, len(remaining) - 1)] if remaining else None
                )
                autosave()
                st.rerun()

    col1, col2, col3 = st.columns([1, 1, 2])
    with col1:
        if st.button("✍️ Write this section", key=f"write_one_{section.id}"):
            run_single_generation(section, sections, form)
    with col2:
        if st.button("🎓 Peer review", key=f"review_{section.id}"):
            run_review(section, form)
    with col3:
        instruction = st.text_input(
            "Rewrite request (optional)",
            placeholder="e.g. make the argument more concise",
            key=f"rewrite_instruction_{section.id}",
        )
        if st.button("🔁 Rewrite naturally", key=f"rewrite_{section.id}"):
            run_rewrite(section, form, instruction)


def _make_driver(llm: LLMClient, placeholder, status_area) -> GenerationDriver:
    def on_delta(section: Section):
        placeholder.markdown(section.content + " ▌")

    def on_status(section: Section):
        status_area.write(_section_label(section))
        if section.status in (SectionStatus.DONE, SectionStatus.PENDING):
            autosave()

    return GenerationDriver(llm, on_delta=on_delta, on_status=on_status)


def run_auto_write(sections: SectionList, form: Dict):
    """Write every pending section in order, streaming into the page"""
    if not check_credentials():
        st.rerun()
    llm = get_llm()
    if llm is None:
        st.session_state.global_error = msg("api_key_missing")
        st.rerun()

    st.session_state.global_error = ""
    status_area = st.empty()
    placeholder = st.empty()
    driver = _make_driver(llm, placeholder, status_area)

    report = driver.auto_write(sections, form)
    if not report.ok:
        failed = sections.get(report.failed_id)
        st.session_state.global_error = msg(
            "generation_failed", section=failed.title if failed else report.failed_id
        )
        st.session_state.active_section_id = report.failed_id
    else:
        st.session_state.flash = msg("generation_complete")
        if report.completed:
            st.session_state.active_section_id = report.completed[-1]
    reset_edit_widgets()
    autosave()
    st.rerun()


def run_single_generation(section: Section, sections: SectionList, form: Dict):
    if not check_credentials():
        st.rerun()
    llm = get_llm()
    if llm is None:
        st.session_state.global_error = msg("api_key_missing")
        st.rerun()

    index = sections.index_of(section.id)
    written = [s.content for s in list(sections)[:index] if s.status == SectionStatus.DONE]
    context = build_previous_context(written, config.PREVIOUS_CONTEXT_CHARS)

    placeholder = st.empty()
    driver = _make_driver(llm, placeholder, st.empty())
    try:
        driver.generate_section(section, form, context, index, len(sections))
        st.session_state.global_error = ""
        reset_edit_widgets()
    except GenerationError as e:
        logger.error(f"Section generation error: {e}", exc_info=True)
        st.session_state.global_error = msg("generation_failed", section=section.title)
    st.rerun()


def run_rewrite(section: Section, form: Dict, instruction: str):
    if not section.content.strip():
        st.session_state.global_error = msg("nothing_to_rewrite")
        st.rerun()
    if not check_credentials():
        st.rerun()
    llm = get_llm()
    if llm is None:
        st.session_state.global_error = msg("api_key_missing")
        st.rerun()

    placeholder = st.empty()
    driver = _make_driver(llm, placeholder, st.empty())
    try:
        driver.rewrite_section(section, form, instruction)
        st.session_state.global_error = ""
        reset_edit_widgets()
    except GenerationError as e:
        logger.error(f"Rewrite error: {e}", exc_info=True)
        st.session_state.global_error = msg("rewrite_failed", section=section.title)
    st.rerun()


def run_review(section: Section, form: Dict):
    if not section.content.strip():
        st.session_state.global_error = msg("nothing_to_review")
        st.rerun()
    if not check_credentials():
        st.rerun()
    llm = get_llm()
    if llm is None:
        st.session_state.global_error = msg("api_key_missing")
        st.rerun()

    placeholder = st.empty()
    driver = _make_driver(llm, placeholder, st.empty())
    try:
        driver.review_section(section, form)
        st.session_state.global_error = ""
        reset_edit_widgets()
    except GenerationError as e:
        logger.error(f"Peer review error: {e}", exc_info=True)
        st.session_state.global_error = msg("review_failed", section=section.title)
    st.rerun()


def run_auto_rewrite(sections: SectionList, form: Dict):
    """Rewrite every written section in order, streaming into the page"""
    if not check_credentials():
        st.rerun()
    llm = get_llm()
    if llm is None:
        st.session_state.global_error = msg("api_key_missing")
        st.rerun()

    st.session_state.global_error = ""
    status_area = st.empty()
    placeholder = st.empty()
    driver = _make_driver(llm, placeholder, status_area)

    report = driver.auto_rewrite(sections, form)
    if not report.ok:
        failed = sections.get(report.failed_id)
        st.session_state.global_error = msg(
            "rewrite_failed", section=failed.title if failed else report.failed_id
        )
        st.session_state.active_section_id = report.failed_id
    else:
        st.session_state.flash = msg("rewrite_complete")
    reset_edit_widgets()
    autosave()
    st.rerun()


def render_actions(sections: SectionList, form: Dict):
    title = form.get("title") or "document"
    col1, col2, col3, col4, col5, col6 = st.columns(6)

    with col1:
        if st.button("🚀 Write all", key="auto_write_btn", type="primary", disabled=len(sections) == 0):
            run_auto_write(sections, form)
    with col2:
        if st.button("🔁 Rewrite all", key="auto_rewrite_btn", disabled=sections.word_count == 0):
            run_auto_rewrite(sections, form)
    with col3:
        st.download_button(
            "⬇️ LaTeX (.tex)",
            data=export_latex(title, sections, form),
            file_name=export_filename(title, "tex"),
            mime="application/x-tex",
            disabled=len(sections) == 0,
        )
    with col4:
        st.download_button(
            "⬇️ Word (.doc)",
            data=export_word_doc(title, sections),
            file_name=export_filename(title, "doc"),
            mime="application/msword",
            disabled=len(sections) == 0,
        )
    with col5:
        if st.button("☁️ Save to library", key="save_remote_btn", disabled=len(sections) == 0):
            save_to_library(sections, form)
    with col6:
        if st.button("🧹 Clear sections", key="clear_sections_btn"):
            sections.clear()
            st.session_state.active_section_id = None
            reset_edit_widgets()
            autosave()
            st.rerun()


def save_to_library(sections: SectionList, form: Dict):
    store = DocumentStore()
    if not store.is_configured:
        st.error(msg("store_not_configured"))
        return
    with st.spinner("Saving..."):
        try:
            store.insert(build_record(form, sections))
        except DocumentStoreError as e:
            logger.error(f"Library save error: {e}", exc_info=True)
            st.error(msg("save_failed", error=str(e) or msg("unknown_error")))
            return
    st.success(msg("save_success"))


def render_writing():
    if st.session_state.writing_window == 1:
        render_form_window()
    else:
        render_editor_window()


# ------------------------------------------------------------------
# Library
# ------------------------------------------------------------------

def open_document(record):
    """Callback: load a saved document into the editor"""
    try:
        sections = record.sections()
    except ContentParseError as e:
        logger.error(f"Could not parse saved document {record.id}: {e}")
        st.session_state.global_error = msg("load_failed")
        return
    load_form_into_widgets({
        **current_form(),
        "title": record.title,
        "topic": record.topic,
        "type": record.type,
        "level": record.level,
    })
    st.session_state.sections = sections
    st.session_state.active_section_id = sections.ids[0] if len(sections) else None
    st.session_state.view = "writing"
    st.session_state.writing_window = 2
    reset_edit_widgets()
    autosave()


def render_library():
    """List, open and delete saved documents"""
    st.markdown("## 📁 Library")
    store = DocumentStore()
    if not store.is_configured:
        st.warning(msg("store_not_configured"))
        return

    try:
        records = store.list()
    except DocumentStoreError as e:
        logger.error(f"Library list error: {e}", exc_info=True)
        st.error(msg("list_failed", error=str(e)))
        return

    if not records:
        st.info("No saved documents yet.")
        return

    for record in records:
        with st.expander(f"{record.title or 'Untitled'} | {record.created_at[:10]}", expanded=False):
            st.write(f"**Subject:** {record.topic} | **Type:** {record.type} | **Level:** {record.level}")
            col1, col2 = st.columns(2)
            with col1:
                st.button("📂 Open", key=f"open_doc_{record.id}", on_click=open_document, args=(record,))
            with col2:
                if st.session_state.confirm_delete_id == record.id:
                    st.warning("Delete this document permanently?")
                    if st.button("Yes, delete", key=f"confirm_delete_{record.id}"):
                        try:
                            store.delete(record.id)
                            st.session_state.flash = msg("delete_success")
                        except DocumentStoreError as e:
                            logger.error(f"Library delete error: {e}", exc_info=True)
                            st.session_state.global_error = msg("delete_failed", error=str(e))
                        st.session_state.confirm_delete_id = None
                        st.rerun()
                    if st.button("Cancel", key=f"cancel_delete_{record.id}"):
                        st.session_state.confirm_delete_id = None
                        st.rerun()
                elif st.button("🗑️ Delete", key=f"delete_doc_{record.id}"):
                    st.session_state.confirm_delete_id = record.id
                    st.rerun()


# ------------------------------------------------------------------
# Settings
# ------------------------------------------------------------------

def render_settings():
    st.markdown("## ⚙️ Settings")

    codes = list(LANGUAGES)
    language = st.selectbox(
        "Message language",
        codes,
        index=codes.index(st.session_state.language) if st.session_state.language in codes else 0,
        format_func=lambda code: LANGUAGES[code],
    )
    st.session_state.language = language

    st.markdown("### Local draft")
    st.write(f"Snapshot file: `{config.DRAFT_DB_PATH}`")
    if st.button("Clear local draft", key="clear_draft_btn"):
        DraftCache().clear()
        st.success("Local draft cleared")

    st.markdown("### Library")
    store = DocumentStore()
    if store.is_configured:
        st.write(f"Connected to `{store.url}` (table `{store.table}`)")
    else:
        st.write(msg("store_not_configured"))


# ------------------------------------------------------------------
# Main
# ------------------------------------------------------------------

def main():
    """Main application flow: view dispatcher"""
    initialize_session()
    setup_sidebar()

    display_header()
    st.markdown("---")

    if st.session_state.global_error:
        st.error(st.session_state.global_error)
    if st.session_state.flash:
        st.success(st.session_state.flash)
        st.session_state.flash = ""

    view = st.session_state.view
    if view == "landing":
        render_landing()
    elif view == "writing":
        render_writing()
    elif view == "library":
        render_library()
    elif view == "settings":
        render_settings()
    else:
        st.error(f"Unknown view: {view}")
        set_view("landing")
        st.rerun()


if __name__ == "__main__":
    main()
