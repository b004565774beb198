ACCENT = "#22c55e"

COMMON_BUTTON_STYLE = """
QPushButton {
  background: transparent;
  border: 0px;
  color: rgba(255,255,255,230);
  border-radius: 8px;
  qproperty-iconSize: 24px 24px;
  padding: 6px;
  min-width: 36px;
  min-height: 36px;
}
QPushButton:hover {
  background: rgba(255,255,255,20);
}
QPushButton:pressed {
  background: rgba(255,255,255,10);
}
QPushButton:disabled {
  color: rgba(255,255,255,90);
}
"""

TOP_BAR_STYLE = COMMON_BUTTON_STYLE + """
QWidget#TopBarBg {
  background: qlineargradient(x1:0, y1:0, x2:0, y2:1, stop:0 rgba(0,0,0,190), stop:1 rgba(0,0,0,0));
}
QLabel#TitleLabel {
  color: white;
  font-family: "Segoe UI";
  font-size: 16px;
  font-weight: 700;
}
QLabel#CertificationBadge {
  color: white;
  font-family: "Segoe UI";
  font-size: 11px;
  font-weight: 600;
  border: 1px solid rgba(255,255,255,140);
  border-radius: 3px;
  padding: 1px 6px;
}
"""

CENTER_CONTROLS_STYLE = COMMON_BUTTON_STYLE + """
QPushButton {
  qproperty-iconSize: 44px 44px;
  min-width: 64px;
  min-height: 64px;
  border-radius: 32px;
}
"""

CONTROL_BAR_STYLE = COMMON_BUTTON_STYLE + """
QWidget#ControlBarBg {
  background: qlineargradient(x1:0, y1:1, x2:0, y2:0, stop:0 rgba(0,0,0,215), stop:1 rgba(0,0,0,0));
}
QLabel#TimeLabel {
  color: white;
  font-family: "Segoe UI";
  font-size: 12px;
  font-weight: 500;
}
QLabel#ButtonCaption {
  color: white;
  font-family: "Segoe UI";
  font-size: 10px;
}
QLabel#HdBadge {
  color: white;
  background: #e53e3e;
  font-size: 9px;
  font-weight: 700;
  border-radius: 2px;
  padding: 0px 3px;
}
"""

PANEL_STYLE = COMMON_BUTTON_STYLE + """
QLabel#PanelTitle {
  color: white;
  font-family: "Segoe UI";
  font-size: 14px;
  font-weight: 600;
}
QPushButton#OptionRow {
  text-align: left;
  padding: 10px 16px;
  border-radius: 0px;
  font-family: "Segoe UI";
  font-size: 13px;
  color: rgba(255,255,255,205);
}
QPushButton#OptionRow:hover {
  background: rgba(255,255,255,13);
}
QPushButton#OptionRow[selected="true"] {
  color: """ + ACCENT + """;
}
QPushButton#CancelButton {
  border: 1px solid rgba(255,255,255,50);
  padding: 8px 18px;
  font-size: 13px;
}
QPushButton#ApplyButton {
  background: """ + ACCENT + """;
  color: black;
  font-weight: 700;
  padding: 8px 18px;
  font-size: 13px;
}
QPushButton#ApplyButton:hover {
  background: #4ade80;
}
QLabel#HdBadge {
  color: white;
  background: #e53e3e;
  font-size: 9px;
  font-weight: 700;
  border-radius: 2px;
  padding: 0px 3px;
}

QSlider::groove:vertical {
  background: rgba(255,255,255,50);
  width: 4px;
  border-radius: 2px;
}
QSlider::add-page:vertical {
  background: """ + ACCENT + """;
  width: 4px;
  border-radius: 2px;
}
QSlider::sub-page:vertical {
  background: rgba(255,255,255,50);
  width: 4px;
  border-radius: 2px;
}
QSlider::handle:vertical {
  background: white;
  width: 14px;
  height: 14px;
  border-radius: 7px;
  margin: 0px -5px;
}
"""

PILL_LABEL_STYLE = """
QLabel {
  color: rgba(255,255,255,235);
  font-family: "Segoe UI";
  font-size: 16px;
  font-weight: 600;
  letter-spacing: 0.3px;
}
"""
