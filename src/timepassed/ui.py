import sys
import datetime
import logging
from typing import Callable, List, Optional

from PySide6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QGridLayout, QCalendarWidget, QPushButton, QLabel, QLineEdit,
    QGroupBox, QFrame, QMessageBox
)
from PySide6.QtGui import QPalette, QColor
from PySide6.QtCore import Qt, QDate, QLocale, Signal

from timepassed.models import AppState
from timepassed.calendar_logic import calculate_period, iso_week_info, shift_week
from timepassed.date_parsing import parse_flexible_date, format_date, INPUT_FORMAT
from timepassed.config import load_config, save_config


# === UI Text Constants ===
WINDOW_TITLE = "Time passed since"
SUBTITLE_TEXT = "Explore time passed since {selected} until {today}"
SEARCH_TITLE = "Search Date"
SEARCH_DESCRIPTION = "Enter a date manually or select from calendar"
INPUT_PLACEHOLDER = "Enter date (dd.MM.yyyy, dd/MM/yyyy, etc.)"
SEARCH_BTN_TEXT = "Search"
CALENDAR_BTN_TEXT = "Open Calendar"
INVALID_DATE_TEXT = "Invalid date. Please use a valid format."
PERIOD_TITLE = "Detailed Period"
PERIOD_DESCRIPTION = "From {selected} to today"
PERIOD_TEXT = "{years} years, {months} months, {days} days"
WEEK_TITLE = "Week {week}"
WEEK_DESCRIPTION = "{year} · {first} - {last}"
TODAY_BTN_TEXT = "Today"
TODAY_BADGE = "TODAY"
FOOTER_TEXT = "Total weeks in {year}: <b>{weeks}</b>"
DARK_BTN_TEXT = "Dark mode"
LIGHT_BTN_TEXT = "Light mode"

# Formatmuster der Anzeige
HEADER_FORMAT = "dd-MM-yyyy"
LONG_FORMAT = "dd MMMM yyyy"
SHORT_FORMAT = "dd MMMM"

# Farbkonstanten
COLOR_ERROR_BG = '#FEE2E2'
COLOR_ERROR_FG = '#B91C1C'
COLOR_TODAY_TOP = '#4ADE80'
COLOR_TODAY_BOTTOM = '#22C55E'
COLOR_TODAY_BORDER = '#16A34A'
COLOR_YEARS = '#2563EB'
COLOR_MONTHS = '#9333EA'
COLOR_WEEKS = '#16A34A'
COLOR_DAYS = '#EA580C'


def qdate_to_date(qdate):
    """Hilfsfunktion: QDate -> datetime.date"""
    return qdate.toPython() if hasattr(qdate, 'toPython') else datetime.date(qdate.year(), qdate.month(), qdate.day())


def date_to_qdate(d):
    return QDate(d.year, d.month, d.day)


def dark_palette():
    pal = QPalette()
    pal.setColor(QPalette.Window, QColor('#09090B'))
    pal.setColor(QPalette.WindowText, QColor('#FAFAFA'))
    pal.setColor(QPalette.Base, QColor('#18181B'))
    pal.setColor(QPalette.AlternateBase, QColor('#27272A'))
    pal.setColor(QPalette.Text, QColor('#FAFAFA'))
    pal.setColor(QPalette.Button, QColor('#27272A'))
    pal.setColor(QPalette.ButtonText, QColor('#FAFAFA'))
    pal.setColor(QPalette.Highlight, QColor('#A1A1AA'))
    pal.setColor(QPalette.HighlightedText, QColor('#09090B'))
    pal.setColor(QPalette.PlaceholderText, QColor('#71717A'))
    return pal


class DateLineEdit(QLineEdit):
    """QLineEdit, das beim Verlassen des Felds `focusLost` sendet."""
    focusLost = Signal()

    def focusOutEvent(self, event):
        super().focusOutEvent(event)
        self.focusLost.emit()


class SearchCard(QGroupBox):
    def __init__(self, parent):
        super().__init__(SEARCH_TITLE)
        self.parent = parent
        layout = QVBoxLayout(self)
        layout.addWidget(QLabel(SEARCH_DESCRIPTION))

        row = QHBoxLayout()
        self.input = DateLineEdit()
        self.input.setPlaceholderText(INPUT_PLACEHOLDER)
        row.addWidget(self.input, 1)
        self.btn_search = QPushButton(SEARCH_BTN_TEXT)
        row.addWidget(self.btn_search)
        self.btn_calendar = QPushButton(CALENDAR_BTN_TEXT)
        row.addWidget(self.btn_calendar)
        layout.addLayout(row)

        # Fehlermeldung direkt unter dem Eingabefeld
        self.error_label = QLabel()
        self.error_label.setStyleSheet(
            f"background: {COLOR_ERROR_BG}; color: {COLOR_ERROR_FG}; padding: 4px; border-radius: 4px;")
        self.error_label.hide()
        layout.addWidget(self.error_label)

        # Kalender als Popup, Wochenbeginn Montag
        self.calendar = QCalendarWidget()
        self.calendar.setWindowFlags(Qt.Popup)
        self.calendar.setFirstDayOfWeek(Qt.Monday)
        self.calendar.setGridVisible(True)

        # Signale
        self.btn_search.clicked.connect(self.parent.on_search)
        self.input.returnPressed.connect(self.parent.on_search)
        self.input.focusLost.connect(self.parent.on_input_focus_lost)
        self.input.textEdited.connect(self.parent.on_input_edited)
        self.btn_calendar.clicked.connect(self.parent.on_open_calendar)
        self.calendar.clicked.connect(self.parent.on_calendar_pick)


class StatCard(QGroupBox):
    def __init__(self, title, caption, color):
        super().__init__(title)
        layout = QVBoxLayout(self)
        self.value = QLabel("0")
        self.value.setStyleSheet(f"font-size: 28px; font-weight: bold; color: {color};")
        layout.addWidget(self.value)
        hint = QLabel(caption)
        hint.setStyleSheet("font-size: 11px; color: gray;")
        layout.addWidget(hint)


class StatsPanel(QWidget):
    def __init__(self, parent):
        super().__init__()
        self.parent = parent
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        detail = QGroupBox(PERIOD_TITLE)
        dl = QVBoxLayout(detail)
        self.period_description = QLabel()
        dl.addWidget(self.period_description)
        self.period_text = QLabel()
        self.period_text.setStyleSheet("font-size: 18px;")
        dl.addWidget(self.period_text)
        layout.addWidget(detail)

        grid = QGridLayout()
        self.years_card = StatCard("Years", "years passed", COLOR_YEARS)
        self.months_card = StatCard("Months", "additional months", COLOR_MONTHS)
        self.weeks_card = StatCard("Weeks", "total weeks", COLOR_WEEKS)
        self.days_card = StatCard("Days", "total days", COLOR_DAYS)
        for i, card in enumerate([self.years_card, self.months_card, self.weeks_card, self.days_card]):
            grid.addWidget(card, i // 2, i % 2)
        layout.addLayout(grid)


class DayCell(QFrame):
    """Eine Kachel im Wochenraster: Wochentag, Tag, Monat."""
    clicked = Signal(object)

    def __init__(self):
        super().__init__()
        self.day = None
        self.setCursor(Qt.PointingHandCursor)
        self.setMinimumHeight(120)
        layout = QVBoxLayout(self)
        layout.setAlignment(Qt.AlignCenter)
        self.day_name = QLabel()
        self.day_number = QLabel()
        self.day_number.setStyleSheet("font-size: 28px; font-weight: bold;")
        self.month_name = QLabel()
        self.badge = QLabel(TODAY_BADGE)
        self.badge.setStyleSheet("font-size: 10px; font-weight: bold;")
        for w in (self.day_name, self.day_number, self.month_name, self.badge):
            w.setAlignment(Qt.AlignCenter)
            layout.addWidget(w)

    def set_day(self, d, locale, is_today, is_selected):
        self.day = d
        self.day_name.setText(format_date(d, "EEEE", locale))
        self.day_number.setText(format_date(d, "dd", locale))
        self.month_name.setText(format_date(d, "MMMM", locale))
        self.badge.setVisible(is_today)
        self.setProperty("is_today", is_today)
        self.setProperty("is_selected", is_selected)
        # Auswahl hat Vorrang vor der Heute-Markierung
        if is_selected:
            style = "DayCell { border: 2px solid palette(highlight); border-radius: 8px; }"
        elif is_today:
            style = ("DayCell { border: 2px solid %s; border-radius: 8px; background: qlineargradient("
                     "x1:0, y1:0, x2:0, y2:1, stop:0 %s, stop:1 %s); }"
                     % (COLOR_TODAY_BORDER, COLOR_TODAY_TOP, COLOR_TODAY_BOTTOM))
        else:
            style = "DayCell { border: 1px solid palette(mid); border-radius: 8px; }"
        self.setStyleSheet(style)

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton and self.day is not None:
            self.clicked.emit(self.day)
        super().mousePressEvent(event)


class WeekPanel(QWidget):
    def __init__(self, parent):
        super().__init__()
        self.parent = parent
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        header = QHBoxLayout()
        titles = QVBoxLayout()
        self.week_title = QLabel()
        self.week_title.setStyleSheet("font-size: 26px; font-weight: bold;")
        titles.addWidget(self.week_title)
        self.week_description = QLabel()
        titles.addWidget(self.week_description)
        header.addLayout(titles, 1)
        self.btn_prev = QPushButton("‹")
        self.btn_today = QPushButton(TODAY_BTN_TEXT)
        self.btn_next = QPushButton("›")
        for btn in (self.btn_prev, self.btn_today, self.btn_next):
            btn.setFlat(True)
            header.addWidget(btn)
        layout.addLayout(header)

        grid = QHBoxLayout()
        self.cells: List[DayCell] = []
        for _ in range(7):
            cell = DayCell()
            cell.clicked.connect(self.parent.on_day_clicked)
            grid.addWidget(cell)
            self.cells.append(cell)
        layout.addLayout(grid)

        self.btn_prev.clicked.connect(self.parent.on_prev_week)
        self.btn_today.clicked.connect(self.parent.on_today)
        self.btn_next.clicked.connect(self.parent.on_next_week)


class MainWindow(QMainWindow):
    def __init__(self, config=None, today_provider: Optional[Callable[[], datetime.date]] = None):
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(1000, 800)
        self.config = config if config is not None else load_config()
        self.locale = self.config['locale']
        self.today_provider = today_provider or datetime.date.today
        self.state = AppState(selected_date=self.today_provider())

        central = QWidget(); self.setCentralWidget(central)
        layout = QVBoxLayout(central)

        # Kopfzeile mit Theme-Umschalter
        head = QHBoxLayout()
        titles = QVBoxLayout()
        title = QLabel(WINDOW_TITLE)
        title.setStyleSheet("font-size: 32px; font-weight: bold;")
        titles.addWidget(title)
        self.subtitle = QLabel()
        self.subtitle.setStyleSheet("color: gray;")
        titles.addWidget(self.subtitle)
        head.addLayout(titles, 1)
        self.btn_theme = QPushButton()
        head.addWidget(self.btn_theme, 0, Qt.AlignTop)
        layout.addLayout(head)

        self.search = SearchCard(self)
        layout.addWidget(self.search)
        self.stats = StatsPanel(self)
        layout.addWidget(self.stats)
        self.week = WeekPanel(self)
        layout.addWidget(self.week)
        self.footer = QLabel()
        self.footer.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.footer)

        self.search.calendar.setLocale(QLocale(self.locale))
        self.btn_theme.clicked.connect(self.on_toggle_theme)

        self.apply_theme(self.config['theme'])
        self.render()

    def today(self):
        return self.today_provider()

    # --- Auswahl ---
    def select_date(self, d, input_text="", error=None):
        self.state.selected_date = d
        self.state.input_text = input_text
        self.state.error = error
        self.render()

    def render(self):
        today = self.today()
        selected = self.state.selected_date
        loc = self.locale

        self.subtitle.setText(SUBTITLE_TEXT.format(
            selected=format_date(selected, HEADER_FORMAT, loc),
            today=format_date(today, HEADER_FORMAT, loc)))

        if self.search.input.text() != self.state.input_text:
            self.search.input.setText(self.state.input_text)
        self.search.error_label.setText(self.state.error or "")
        self.search.error_label.setVisible(bool(self.state.error))

        period = calculate_period(selected, today)
        self.stats.period_description.setText(
            PERIOD_DESCRIPTION.format(selected=format_date(selected, LONG_FORMAT, loc)))
        self.stats.period_text.setText(PERIOD_TEXT.format(
            years=period.years, months=period.months, days=period.days))
        self.stats.years_card.value.setText(str(period.years))
        self.stats.months_card.value.setText(str(period.months))
        self.stats.weeks_card.value.setText(str(period.total_weeks))
        self.stats.days_card.value.setText(str(period.total_days))

        info = iso_week_info(selected)
        self.week.week_title.setText(WEEK_TITLE.format(week=info.week_number))
        self.week.week_description.setText(WEEK_DESCRIPTION.format(
            year=selected.year,
            first=format_date(info.days[0], SHORT_FORMAT, loc),
            last=format_date(info.days[-1], LONG_FORMAT, loc)))
        for cell, d in zip(self.week.cells, info.days):
            cell.set_day(d, loc, is_today=(d == today), is_selected=(d == selected))

        self.footer.setText(FOOTER_TEXT.format(year=selected.year, weeks=info.weeks_in_year))

    # --- Eingabe ---
    def on_search(self):
        text = self.search.input.text()
        self.state.input_text = text
        if not text:
            return
        parsed = parse_flexible_date(text.strip(), locale=self.locale)
        if parsed:
            self.select_date(parsed)
        else:
            logging.info(f"[TimePassed] Kein Datumsformat passt auf {text!r}.")
            self.state.error = INVALID_DATE_TEXT
            self.render()

    def on_input_focus_lost(self):
        text = self.search.input.text()
        self.state.input_text = text
        if not text:
            return
        parsed = parse_flexible_date(text.strip(), locale=self.locale)
        if parsed:
            self.state.input_text = format_date(parsed, INPUT_FORMAT, self.locale)
            self.state.error = None
            self.render()

    def on_input_edited(self, text):
        self.state.input_text = text
        if self.state.error:
            self.state.error = None
            self.search.error_label.hide()

    # --- Kalender ---
    def on_open_calendar(self):
        cal = self.search.calendar
        cal.setMaximumDate(date_to_qdate(self.today()))
        cal.setSelectedDate(date_to_qdate(self.state.selected_date))
        btn = self.search.btn_calendar
        cal.move(btn.mapToGlobal(btn.rect().bottomLeft()))
        cal.show()

    def on_calendar_pick(self, qdate):
        d = qdate_to_date(qdate)
        if d > self.today():
            return
        self.search.calendar.hide()
        self.select_date(d)

    # --- Wochennavigation ---
    def on_prev_week(self):
        self.select_date(shift_week(self.state.selected_date, -1),
                         self.state.input_text, self.state.error)

    def on_next_week(self):
        self.select_date(shift_week(self.state.selected_date, 1),
                         self.state.input_text, self.state.error)

    def on_today(self):
        self.select_date(self.today(), self.state.input_text, self.state.error)

    def on_day_clicked(self, d):
        self.select_date(d, format_date(d, INPUT_FORMAT, self.locale))

    # --- Theme ---
    def apply_theme(self, theme):
        app = QApplication.instance()
        if theme == 'dark':
            app.setPalette(dark_palette())
            self.btn_theme.setText(LIGHT_BTN_TEXT)
        else:
            app.setPalette(app.style().standardPalette())
            self.btn_theme.setText(DARK_BTN_TEXT)
        self.config['theme'] = theme

    def on_toggle_theme(self):
        theme = 'light' if self.config['theme'] == 'dark' else 'dark'
        self.apply_theme(theme)
        self.render()
        try:
            save_config(self.config)
        except (OSError, ValueError) as e:
            logging.error(f"Fehler beim Speichern der Konfiguration: {e}")
            QMessageBox.critical(self, "Fehler", f"Fehler beim Speichern der Konfiguration: {e}")


def main():
    app = QApplication(sys.argv)
    win = MainWindow()
    win.show()
    sys.exit(app.exec())

if __name__ == '__main__':
    main()
