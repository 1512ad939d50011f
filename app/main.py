"""
Streamlit Frontend for Spendwise

DESIGN PRINCIPLES:
1. Simple, clear interface
2. Clear error messages in simple language
3. Visual feedback for all operations
4. Derived state (recurring expenses, notifications) refreshed on every run

Pages:
- Home: scan a receipt (upload or camera) or add an expense manually
- Dashboard: filters, summary, trends, AI insights, export, expense list
- Budgets, Recurring, Goals, Reports
- Settings: currency, theme, dashboard widgets, notifications
"""

import asyncio
from datetime import date, datetime
from decimal import Decimal

import streamlit as st

from spendwise.config import validate_all_settings
from spendwise.models import (
    CURRENCIES,
    DashboardWidgets,
    Frequency,
    NotificationType,
    MAX_AMOUNT,
    RecurringExpense,
    SplitPart,
    Theme,
    Accent,
)
from spendwise.orchestrator import AppComponents, create_app_components
from spendwise.reports import (
    COMPARISONS,
    compare_periods,
    filter_expenses,
    spending_trends,
    spent_this_month_by_category,
    total_spent,
    totals_by_category,
)
from spendwise.repositories import SplitError
from spendwise.services.ai import AIServiceError, InsufficientDataError
from spendwise.services.export import ExportError
from spendwise.services.image import ImageError, crop_box_from_fractions
from spendwise.services.storage import DuplicateError, NotFoundError
from spendwise.validation import ExpenseFormValidator, parse_amount


# Page configuration
st.set_page_config(
    page_title="Spendwise",
    page_icon="💸",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .stButton>button {
        width: 100%;
        margin-top: 10px;
    }
    .big-number {
        font-size: 2.5em;
        font-weight: bold;
    }
</style>
""", unsafe_allow_html=True)

NEW_CATEGORY = "➕ Add new category"

NOTIFICATION_ICONS = {
    NotificationType.BUDGET_CRITICAL: "🔴",
    NotificationType.BUDGET_WARNING: "🟡",
    NotificationType.REMINDER: "🔔",
}

WIDGET_LABELS = {
    "ai_summary": "AI Summary",
    "ai_coach": "AI Savings Coach",
    "spending_trends": "Spending Trends",
    "expense_list": "Expense List",
    "summary": "Category Summary",
    "export_data": "Export Data",
}

THEME_COLORS = {
    Theme.DARK: {"background": "#0f172a", "surface": "#1e293b", "text": "#e2e8f0"},
    Theme.LIGHT: {"background": "#f8fafc", "surface": "#ffffff", "text": "#0f172a"},
}

ACCENT_COLORS = {
    Accent.CYAN: "#06b6d4",
    Accent.INDIGO: "#6366f1",
    Accent.PINK: "#ec4899",
}


def apply_theme(theme: Theme, accent: Accent):
    """Restyle the page with the stored theme and accent colour."""
    colors = THEME_COLORS[theme]
    accent_color = ACCENT_COLORS[accent]
    st.markdown(f"""
<style>
    .stApp, [data-testid="stHeader"] {{
        background-color: {colors['background']};
        color: {colors['text']};
    }}
    [data-testid="stSidebar"] {{
        background-color: {colors['surface']};
    }}
    .stApp p, .stApp label, .stApp h1, .stApp h2, .stApp h3, .stApp li {{
        color: {colors['text']};
    }}
    .stButton>button[kind="primary"], .stDownloadButton>button {{
        background-color: {accent_color};
        border-color: {accent_color};
    }}
    .stProgress > div > div > div > div {{
        background-color: {accent_color};
    }}
    .big-number {{
        color: {accent_color};
    }}
</style>
""", unsafe_allow_html=True)


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@st.cache_resource
def get_components() -> AppComponents:
    """Get or create application components (cached)."""
    return create_app_components()


def main():
    """Main application entry point."""
    app = get_components()
    apply_theme(app.preferences.get_theme(), app.preferences.get_accent())

    # Derived state is brought up to date before anything is drawn
    added = app.recurring_flow.run_daily_check(date.today())
    if added.count:
        st.toast(f"Added {added.count} recurring expense(s).")
    notifications = app.notification_flow.refresh(datetime.now())

    currency = app.preferences.get_currency()
    unread = sum(1 for n in notifications if not n.read)

    st.sidebar.title("💸 Spendwise")
    st.sidebar.caption(f"Currency: {currency.code} · Theme: {app.preferences.get_theme().value}")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        [
            "🏠 Home",
            "📊 Dashboard",
            "🎯 Budgets",
            "🔁 Recurring",
            "🏦 Goals",
            "📈 Reports",
            f"⚙️ Settings ({unread} unread)" if unread else "⚙️ Settings",
        ],
        index=0,
    )

    if not app.preferences.is_onboarding_complete():
        with st.sidebar.expander("👋 Getting started", expanded=True):
            st.markdown(
                """
                1. Scan a receipt or add an expense
                2. Set monthly budgets per category
                3. Add recurring bills and savings goals
                """
            )
            if st.button("Got it"):
                app.preferences.complete_onboarding()
                st.rerun()

    if page.startswith("🏠"):
        render_home_page(app)
    elif page.startswith("📊"):
        render_dashboard_page(app)
    elif page.startswith("🎯"):
        render_budgets_page(app)
    elif page.startswith("🔁"):
        render_recurring_page(app)
    elif page.startswith("🏦"):
        render_goals_page(app)
    elif page.startswith("📈"):
        render_reports_page(app)
    else:
        render_settings_page(app)


# =============================================================================
# HOME
# =============================================================================

def render_home_page(app: AppComponents):
    """Receipt scanning and manual entry."""
    st.title("🏠 Add Expenses")

    scan_tab, manual_tab = st.tabs(["📷 Scan Receipt", "✍️ Add Manually"])

    with scan_tab:
        source = st.radio("Source", ["Upload a photo", "Use camera"], horizontal=True)
        if source == "Upload a photo":
            image = st.file_uploader(
                "Choose a receipt photo",
                type=["jpg", "jpeg", "png", "webp"],
                help="Take a clear, well-lit photo of your receipt",
            )
        else:
            image = st.camera_input("Take a photo of your receipt")

        if image is not None:
            image_bytes = image.getvalue()
            st.image(image_bytes, width=300)

            crop_box = None
            with st.expander("✂️ Crop (optional)"):
                horizontal = st.slider("Horizontal range (%)", 0, 100, (0, 100))
                vertical = st.slider("Vertical range (%)", 0, 100, (0, 100))
                if horizontal != (0, 100) or vertical != (0, 100):
                    try:
                        crop_box = crop_box_from_fractions(
                            image_bytes,
                            horizontal[0] / 100,
                            vertical[0] / 100,
                            horizontal[1] / 100,
                            vertical[1] / 100,
                        )
                    except ImageError as e:
                        st.error(str(e))
                        st.stop()

            if st.button("🔍 Process Receipt", type="primary"):
                with st.spinner("Reading your receipt... Please wait."):
                    success, message, added, hints = run_async(
                        app.receipt_flow.process_receipt(image_bytes, crop_box=crop_box)
                    )
                for hint in hints:
                    st.warning(f"📷 {hint}")
                if success:
                    st.success(message)
                    for expense in added:
                        st.markdown(
                            f"- **{expense.name}** ({expense.category}): {currency_text(app, expense.price)}"
                        )
                else:
                    st.error(message)

    with manual_tab:
        render_manual_form(app)


def render_manual_form(app: AppComponents):
    categories = app.categories.list_all()
    category = st.selectbox("Category", categories + [NEW_CATEGORY], key="manual_category")

    with st.form("manual_expense", clear_on_submit=True):
        name = st.text_input("Item name")
        price = st.text_input("Price", placeholder="0.00")
        day = st.date_input("Date", value=date.today())
        new_category = None
        if category == NEW_CATEGORY:
            new_category = st.text_input("New category name")
        submitted = st.form_submit_button("Add Expense", type="primary")

    if submitted:
        result, expense = app.entry_flow.add_manual(
            name=name,
            price=price,
            day=day,
            category=category,
            new_category=new_category,
        )
        for field, message in result.errors_by_field.items():
            st.error(message)
        for issue in result.issues:
            if issue.severity == "warning":
                st.warning(issue.message)
        if expense:
            st.success(f"Added {expense.name}.")


# =============================================================================
# DASHBOARD
# =============================================================================

def currency_text(app: AppComponents, amount) -> str:
    return app.preferences.get_currency().format(amount)


def render_dashboard_page(app: AppComponents):
    """Filtered view of expenses with the configured widgets."""
    st.title("📊 Dashboard")
    widgets = app.preferences.get_widgets()
    categories = app.categories.list_all()

    col1, col2, col3 = st.columns(3)
    with col1:
        period = st.selectbox(
            "Time period",
            options=["7d", "30d", "90d", "all"],
            index=3,
            format_func=lambda p: {"7d": "Last 7 days", "30d": "Last 30 days",
                                   "90d": "Last 90 days", "all": "All time"}[p],
        )
    with col2:
        search = st.text_input("Search by name")
    with col3:
        selected = st.multiselect("Categories", categories)

    expenses = filter_expenses(
        app.expenses.list_all(), period, search, selected, date.today()
    )

    st.markdown(
        f'<p class="big-number">{currency_text(app, total_spent(expenses))}</p>',
        unsafe_allow_html=True,
    )
    st.caption(f"{len(expenses)} expense(s)")

    if widgets.ai_summary:
        with st.expander("🤖 AI Summary"):
            if st.button("Generate insights"):
                with st.spinner("Analyzing..."):
                    try:
                        st.markdown(run_async(app.insights_flow.insights(expenses)))
                    except AIServiceError as e:
                        st.error(str(e))

    if widgets.ai_coach:
        goals = app.goals.list_all()
        if goals:
            with st.expander("🏦 AI Savings Coach"):
                goal = st.selectbox("Goal", goals, format_func=lambda g: g.name)
                if st.button("Get coaching"):
                    with st.spinner("Thinking..."):
                        try:
                            st.markdown(run_async(app.insights_flow.coach(goal)))
                        except AIServiceError as e:
                            st.error(str(e))

    if widgets.spending_trends and expenses:
        st.subheader("📈 Spending Trends")
        trends = spending_trends(expenses)
        c1, c2, c3 = st.columns(3)
        c1.metric("Average per day", currency_text(app, trends.average_daily))
        c2.metric("Average per month", currency_text(app, trends.average_monthly))
        if trends.highest_day:
            c3.metric(
                f"Highest day ({trends.highest_day.day.isoformat()})",
                currency_text(app, trends.highest_day.amount),
            )
        st.line_chart(
            {
                "Date": [d.day.isoformat() for d in trends.daily],
                "Amount": [float(d.amount) for d in trends.daily],
            },
            x="Date",
            y="Amount",
        )

    if widgets.summary and expenses:
        st.subheader("🗂️ By Category")
        for row in totals_by_category(expenses):
            st.markdown(f"- **{row.category}**: {currency_text(app, row.amount)}")

    if widgets.export_data:
        render_export(app, expenses)

    if widgets.expense_list:
        render_expense_list(app, expenses, categories)


def render_export(app: AppComponents, expenses):
    st.subheader("⬇️ Export")
    col1, col2 = st.columns(2)
    for column, fmt in ((col1, "csv"), (col2, "json")):
        with column:
            try:
                export_file = app.export_flow.export(expenses, fmt)
            except ExportError as e:
                st.caption(str(e))
                continue
            st.download_button(
                f"Download {fmt.upper()}",
                data=export_file.content,
                file_name=export_file.filename,
                mime=export_file.mime_type,
            )


def render_expense_list(app: AppComponents, expenses, categories):
    st.subheader("🧾 Expenses")
    if not expenses:
        st.info("No expenses match the current filters.")
        return

    for expense in expenses:
        label = f"{expense.date.isoformat()} · {expense.name} · {currency_text(app, expense.price)}"
        if expense.split_group_id:
            label += " · split"
        with st.expander(label):
            render_edit_expense(app, expense, categories)
            render_split_expense(app, expense, categories)
            if st.button("🗑️ Delete", key=f"delete-{expense.id}"):
                app.expenses.remove(expense.id)
                st.rerun()


def render_edit_expense(app: AppComponents, expense, categories):
    with st.form(f"edit-{expense.id}"):
        name = st.text_input("Name", value=expense.name)
        category = st.selectbox(
            "Category",
            categories,
            index=categories.index(expense.category) if expense.category in categories else 0,
        )
        price = st.text_input("Price", value=str(expense.price))
        day = st.date_input("Date", value=expense.date)
        if st.form_submit_button("💾 Save changes"):
            result = ExpenseFormValidator(categories).validate_expense(name, price, day)
            if result.has_errors:
                st.error(ExpenseFormValidator.get_user_friendly_summary(result))
                return
            try:
                app.expenses.update(expense.model_copy(update={
                    "name": name.strip(),
                    "category": category,
                    "price": Decimal(price.strip()),
                    "date": day,
                }))
            except NotFoundError as e:
                st.error(str(e))
                return
            st.rerun()


def render_split_expense(app: AppComponents, expense, categories):
    st.markdown("**Split this expense**")
    count = st.number_input(
        "Number of parts", min_value=2, max_value=10, value=2, key=f"split-count-{expense.id}"
    )
    parts = []
    for index in range(int(count)):
        c1, c2, c3 = st.columns(3)
        name = c1.text_input("Name", key=f"split-name-{expense.id}-{index}")
        category = c2.selectbox(
            "Category",
            categories,
            index=categories.index(expense.category) if expense.category in categories else 0,
            key=f"split-category-{expense.id}-{index}",
        )
        price = c3.number_input(
            "Price", min_value=0.0, max_value=float(MAX_AMOUNT), step=0.01, format="%.2f",
            key=f"split-price-{expense.id}-{index}",
        )
        parts.append(SplitPart(name=name, category=category, price=price))

    remaining = expense.price - sum((p.price for p in parts), Decimal("0.00"))
    st.caption(f"Remaining: {currency_text(app, remaining)}")
    if st.button("✂️ Split", key=f"split-{expense.id}"):
        try:
            app.expenses.split(expense.id, parts)
        except (SplitError, NotFoundError) as e:
            st.error(str(e))
            return
        st.rerun()


# =============================================================================
# BUDGETS
# =============================================================================

def render_budgets_page(app: AppComponents):
    st.title("🎯 Budgets")
    categories = app.categories.list_all()
    budgets = app.budgets.get_all()
    spent = spent_this_month_by_category(app.expenses.list_all(), categories, date.today())

    for category in categories:
        limit = budgets.get(category, Decimal("0.00"))
        used = spent.get(category, Decimal("0.00"))
        col1, col2 = st.columns([3, 1])
        with col1:
            st.markdown(f"**{category}**: {currency_text(app, used)} of {currency_text(app, limit)}")
            if limit > 0:
                st.progress(min(float(used / limit), 1.0))
        with col2:
            new_limit = st.number_input(
                "Limit", min_value=0.0, max_value=float(MAX_AMOUNT), value=float(limit), step=10.0,
                key=f"budget-{category}", label_visibility="collapsed",
            )
            if Decimal(str(new_limit)).quantize(Decimal("0.01")) != limit:
                app.budgets.set_budget(category, new_limit)
                st.rerun()

    st.markdown("---")
    st.subheader("🤖 AI Budget Suggestions")
    if st.button("Suggest budgets", type="primary"):
        with st.spinner("Looking at your recent spending..."):
            try:
                suggestions = run_async(app.insights_flow.suggest_budgets(date.today()))
            except (InsufficientDataError, AIServiceError) as e:
                st.error(str(e))
                return
        if suggestions:
            for category in suggestions:
                st.session_state.pop(f"budget-{category}", None)
            st.success("Budgets updated from suggestions.")
            for category, amount in suggestions.items():
                st.markdown(f"- **{category}**: {currency_text(app, amount)}")
        else:
            st.info("No suggestions were returned.")


# =============================================================================
# RECURRING
# =============================================================================

def render_recurring_page(app: AppComponents):
    st.title("🔁 Recurring Expenses")
    categories = app.categories.list_all()

    with st.form("recurring", clear_on_submit=True):
        name = st.text_input("Name")
        price = st.text_input("Price")
        category = st.selectbox("Category", categories)
        frequency = st.selectbox(
            "Frequency", list(Frequency), index=1, format_func=lambda f: f.value.title()
        )
        start_date = st.date_input("Start date", value=date.today())
        if st.form_submit_button("Add recurring expense", type="primary"):
            result = ExpenseFormValidator(categories).validate_recurring(name, price, start_date)
            if result.has_errors:
                st.error(ExpenseFormValidator.get_user_friendly_summary(result))
            else:
                app.recurring.add(name.strip(), category, price, frequency, start_date)
                app.recurring_flow.run_daily_check(date.today(), force=True)
                st.rerun()

    for item in app.recurring.list_all():
        col1, col2 = st.columns([4, 1])
        col1.markdown(
            f"**{item.name}** · {currency_text(app, item.price)} · {item.frequency.value} "
            f"from {item.start_date.isoformat()} (last added {item.last_added_date.isoformat()})"
        )
        if col2.button("🗑️", key=f"recurring-delete-{item.id}"):
            app.recurring.remove(item.id)
            st.rerun()
        with st.expander(f"✏️ Edit {item.name}"):
            render_recurring_edit_form(app, item, categories)


def render_recurring_edit_form(app: AppComponents, item: RecurringExpense, categories: list[str]):
    """Edit any field. The watermark is kept unless changed here."""
    frequencies = list(Frequency)
    with st.form(f"recurring-edit-{item.id}"):
        name = st.text_input("Name", value=item.name, key=f"recurring-name-{item.id}")
        price = st.text_input("Price", value=str(item.price), key=f"recurring-price-{item.id}")
        category = st.selectbox(
            "Category",
            categories,
            index=categories.index(item.category) if item.category in categories else 0,
            key=f"recurring-category-{item.id}",
        )
        frequency = st.selectbox(
            "Frequency",
            frequencies,
            index=frequencies.index(item.frequency),
            format_func=lambda f: f.value.title(),
            key=f"recurring-frequency-{item.id}",
        )
        start_date = st.date_input(
            "Start date", value=item.start_date, key=f"recurring-start-{item.id}"
        )
        last_added_date = st.date_input(
            "Last added",
            value=item.last_added_date,
            help="Occurrences after this date are added by the daily check",
            key=f"recurring-last-added-{item.id}",
        )
        if st.form_submit_button("Save changes"):
            result = ExpenseFormValidator(categories).validate_recurring(name, price, start_date)
            if result.has_errors:
                st.error(ExpenseFormValidator.get_user_friendly_summary(result))
                return
            try:
                app.recurring.update(item.model_copy(update={
                    "name": name.strip(),
                    "price": parse_amount(price),
                    "category": category,
                    "frequency": frequency,
                    "start_date": start_date,
                    "last_added_date": last_added_date,
                }))
            except NotFoundError as e:
                st.error(str(e))
                return
            app.recurring_flow.run_daily_check(date.today(), force=True)
            st.rerun()


# =============================================================================
# GOALS
# =============================================================================

def render_goals_page(app: AppComponents):
    st.title("🏦 Savings Goals")

    with st.form("goal", clear_on_submit=True):
        name = st.text_input("Goal name")
        target = st.text_input("Target amount")
        saved = st.text_input("Saved so far", value="0")
        deadline = st.date_input("Deadline", value=date.today())
        if st.form_submit_button("Add goal", type="primary"):
            validator = ExpenseFormValidator(app.categories.list_all())
            result = validator.validate_goal(name, target, saved, deadline)
            if result.has_errors:
                st.error(validator.get_user_friendly_summary(result))
            else:
                app.goals.add(name.strip(), target, deadline, saved)
                st.rerun()

    for goal in app.goals.list_all():
        st.markdown(
            f"**{goal.name}**: {currency_text(app, goal.saved_amount)} of "
            f"{currency_text(app, goal.target_amount)} by {goal.deadline.isoformat()}"
        )
        st.progress(goal.progress_percent / 100)
        col1, col2 = st.columns([3, 1])
        amount = col1.number_input(
            "Add savings", min_value=0.0, max_value=float(MAX_AMOUNT), step=10.0, key=f"goal-add-{goal.id}"
        )
        if col1.button("💰 Add", key=f"goal-save-{goal.id}") and amount > 0:
            app.goals.update(goal.model_copy(update={
                "saved_amount": min(
                    goal.saved_amount + Decimal(str(amount)).quantize(Decimal("0.01")), MAX_AMOUNT
                ),
            }))
            st.rerun()
        if col2.button("🗑️", key=f"goal-delete-{goal.id}"):
            app.goals.remove(goal.id)
            st.rerun()


# =============================================================================
# REPORTS
# =============================================================================

def render_reports_page(app: AppComponents):
    st.title("📈 Reports")
    comparison = st.selectbox(
        "Compare",
        COMPARISONS,
        format_func=lambda c: {
            "last_month": "vs. Last Month",
            "last_7_days": "vs. Previous 7 Days",
            "last_30_days": "vs. Previous 30 Days",
        }[c],
    )
    report = compare_periods(app.expenses.list_all(), comparison, date.today())

    col1, col2, col3 = st.columns(3)
    col1.metric(report.current_label, currency_text(app, report.current_total))
    col2.metric(report.comparison_label, currency_text(app, report.comparison_total))
    col3.metric(
        "Change",
        currency_text(app, report.difference),
        f"{report.percentage_change:.1f}%",
        delta_color="inverse",
    )

    if report.categories:
        st.bar_chart(
            {
                "Category": [row.category for row in report.categories],
                report.current_label: [float(row.current) for row in report.categories],
                report.comparison_label: [float(row.comparison) for row in report.categories],
            },
            x="Category",
            y=[report.current_label, report.comparison_label],
        )
    else:
        st.info("No expenses in either period.")


# =============================================================================
# SETTINGS
# =============================================================================

def render_settings_page(app: AppComponents):
    st.title("⚙️ Settings")

    st.markdown("### 🔔 Notifications")
    notifications = app.notifications.list_all()
    if not notifications:
        st.info("You're all caught up.")
    for notification in notifications:
        icon = NOTIFICATION_ICONS.get(notification.type, "🔔")
        marker = "" if notification.read else " **(new)**"
        st.markdown(
            f"{icon} {notification.message}{marker}  \n"
            f"<small>{notification.timestamp:%d %b %Y %H:%M}</small>",
            unsafe_allow_html=True,
        )
    col1, col2 = st.columns(2)
    if col1.button("Mark all as read"):
        app.notification_flow.mark_all_read()
        st.rerun()
    if col2.button("Clear all"):
        app.notification_flow.clear()
        st.rerun()

    st.markdown("---")
    st.markdown("### Preferences")
    codes = [c.code for c in CURRENCIES]
    current = app.preferences.get_currency()
    code = st.selectbox(
        "Currency",
        codes,
        index=codes.index(current.code),
        format_func=lambda c: next(f"{x.symbol} {x.name}" for x in CURRENCIES if x.code == c),
    )
    if code != current.code:
        app.preferences.set_currency(code)
        st.rerun()

    theme = st.radio("Theme", list(Theme), index=list(Theme).index(app.preferences.get_theme()),
                     format_func=lambda t: t.value.title(), horizontal=True)
    if theme != app.preferences.get_theme():
        app.preferences.set_theme(theme)
        st.rerun()
    accent = st.radio("Accent", list(Accent), index=list(Accent).index(app.preferences.get_accent()),
                      format_func=lambda a: a.value.title(), horizontal=True)
    if accent != app.preferences.get_accent():
        app.preferences.set_accent(accent)
        st.rerun()

    st.markdown("### Dashboard Widgets")
    widgets = app.preferences.get_widgets()
    for field in DashboardWidgets.model_fields:
        checked = st.checkbox(WIDGET_LABELS.get(field, field), value=getattr(widgets, field))
        if checked != getattr(widgets, field):
            app.preferences.toggle_widget(field)
            st.rerun()

    st.markdown("### Categories")
    with st.form("category", clear_on_submit=True):
        new_name = st.text_input("New category name")
        if st.form_submit_button("Add category"):
            try:
                app.categories.add(new_name)
                st.success(f"Added {new_name.strip()}.")
            except (ValueError, DuplicateError) as e:
                st.error(str(e))

    st.markdown("---")
    st.markdown("### Connection Status")
    status = validate_all_settings()
    for name, key in (("Gemini (AI)", "gemini"), ("Local storage", "storage")):
        if status.get(key, False):
            st.success(f"✅ {name} - Configured")
        else:
            st.error(f"❌ {name} - {status.get(f'{key}_error', 'Not configured')}")
    st.markdown(
        "To configure the application, create a `.env` file with your API keys. "
        "See `.env.example` for the required variables."
    )


if __name__ == "__main__":
    main()
