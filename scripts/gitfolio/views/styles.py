#------------------------------------------------------------
#                          styles.py
#      Inline CSS for the portfolio layout and each of
#                   the three visual templates.

from ..models import TemplateKind

BASE_STYLES = """
* { margin: 0; padding: 0; box-sizing: border-box; }
html { scroll-behavior: smooth; -webkit-font-smoothing: antialiased; -moz-osx-font-smoothing: grayscale; }
body { font-family: "Inter", -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif; line-height: 1.6; min-height: 100vh; }
img { max-width: 100%; height: auto; }
a { text-decoration: none; transition: all 0.2s cubic-bezier(0.4, 0, 0.2, 1); }
::selection { background: rgba(102, 126, 234, 0.2); }
.portfolio-container { max-width: 1100px; margin: 0 auto; padding: clamp(2rem, 5vw, 4rem); }
.hero { text-align: center; padding: clamp(3rem, 8vw, 6rem) 0; }
.avatar { width: 140px; height: 140px; border-radius: 50%; margin-bottom: 1.75rem; object-fit: cover; transition: transform 0.3s ease; }
.avatar:hover { transform: scale(1.03); }
.name { font-size: clamp(2rem, 5vw, 3rem); font-weight: 700; letter-spacing: -0.03em; margin-bottom: 0.75rem; line-height: 1.2; }
.bio { font-size: clamp(1rem, 2vw, 1.125rem); max-width: 560px; margin: 0 auto 1.25rem; line-height: 1.7; }
.location { font-size: 0.9rem; margin-bottom: 2rem; font-weight: 500; }
.social-links { display: flex; justify-content: center; gap: 0.75rem; }
.social-link { display: flex; align-items: center; justify-content: center; width: 44px; height: 44px; border-radius: 50%; }
.social-link:hover { transform: translateY(-2px); }
.section-title { font-size: clamp(1.25rem, 3vw, 1.5rem); font-weight: 600; margin-bottom: 2rem; letter-spacing: -0.02em; }
.projects-grid { display: grid; gap: 1.25rem; grid-template-columns: repeat(3, 1fr); }
.project-card { padding: 1.75rem; border-radius: 16px; transition: all 0.25s cubic-bezier(0.4, 0, 0.2, 1); }
.project-title { font-size: 1.125rem; font-weight: 600; margin-bottom: 0.5rem; letter-spacing: -0.01em; }
.project-desc { font-size: 0.9rem; margin-bottom: 1.25rem; line-height: 1.6; }
.all-projects { margin-top: 4rem; }
.project-row { display: flex; align-items: center; padding: 1rem 1.5rem; }
.row-name { font-weight: 600; min-width: 160px; }
.row-desc { flex: 1; font-size: 0.875rem; white-space: nowrap; overflow: hidden; text-overflow: ellipsis; margin: 0 1.5rem; }
.row-stats { font-size: 0.8rem; }
.footer { text-align: center; padding: 4rem 0 3rem; font-size: 0.85rem; }
@media (max-width: 768px) {
    .portfolio-container { padding: 1.5rem; }
    .projects-grid { grid-template-columns: 1fr !important; }
    .hero { padding: 2.5rem 0; }
}
"""

MINIMAL_STYLES = """
body { background: #FAFAFA; color: #1A1A1A; }
.hero { border-bottom: 1px solid #E5E5E7; background: linear-gradient(180deg, #FFFFFF 0%, #FAFAFA 100%); }
.avatar { border: 4px solid white; box-shadow: 0 8px 24px rgba(0,0,0,0.12); }
.bio { color: #6E6E73; }
.location { color: #86868B; }
.social-link { background: #F5F5F7; color: #6E6E73; border: 1px solid #E5E5E7; }
.social-link:hover { background: var(--primary, #0071E3); color: white; border-color: var(--primary, #0071E3); }
.section-title { color: #1A1A1A; }
.project-card { background: white; border: 1px solid #E5E5E7; box-shadow: 0 1px 3px rgba(0,0,0,0.04); }
.project-card:hover { box-shadow: 0 12px 24px rgba(0,0,0,0.1); transform: translateY(-4px); border-color: #D1D1D6; }
.project-title a { color: #1A1A1A; }
.project-title a:hover { color: var(--primary, #0071E3); }
.project-desc { color: #6E6E73; }
.project-topics { display: flex; gap: 0.4rem; flex-wrap: wrap; margin-bottom: 1rem; }
.topic-tag { font-size: 0.7rem; padding: 0.15rem 0.5rem; border-radius: 999px; background: #EEF2FF; color: var(--primary, #0071E3); }
.project-meta { display: flex; justify-content: space-between; align-items: center; flex-wrap: wrap; gap: 0.5rem; }
.project-langs { display: flex; gap: 0.5rem; flex-wrap: wrap; }
.lang-tag { font-size: 0.75rem; padding: 0.3rem 0.6rem; background: #F5F5F7; border-radius: 6px; border-left: 3px solid var(--lang-color, #D1D1D6); color: #6E6E73; font-weight: 500; }
.project-stats { display: flex; gap: 1rem; font-size: 0.8rem; color: #86868B; }
.demo-link { display: inline-flex; align-items: center; gap: 0.25rem; margin-top: 1.25rem; color: var(--primary, #0071E3); font-size: 0.875rem; font-weight: 500; }
.demo-link:hover { opacity: 0.8; }
.projects-list { border: 1px solid #E5E5E7; border-radius: 16px; overflow: hidden; background: white; }
.project-row { border-bottom: 1px solid #E5E5E7; color: #1A1A1A; }
.project-row:last-child { border-bottom: none; }
.project-row:hover { background: #F5F5F7; }
.row-desc, .row-stats { color: #86868B; }
.footer { color: #86868B; }
.footer a { color: #6E6E73; }
.footer a:hover { color: var(--primary, #0071E3); }
"""

DARK_STYLES = """
body { background: #0A0A0A; color: #F5F5F7; }
.portfolio-container { background: linear-gradient(180deg, #0A0A0A 0%, #141414 100%); min-height: 100vh; }
.avatar { border: 3px solid var(--accent, #0A84FF); box-shadow: 0 0 40px rgba(10, 132, 255, 0.25); }
.name { color: #F5F5F7; }
.bio { color: #A1A1A6; }
.location { color: #6E6E73; }
.social-link { background: rgba(255,255,255,0.06); color: #A1A1A6; border: 1px solid #2C2C2E; }
.social-link:hover { background: var(--accent, #0A84FF); color: white; border-color: var(--accent, #0A84FF); }
.section-title { color: #F5F5F7; font-family: "JetBrains Mono", "Fira Code", monospace; }
.section-title::before { content: '// '; color: var(--accent, #0A84FF); }
.project-card { background: rgba(255,255,255,0.04); border: 1px solid #2C2C2E; backdrop-filter: blur(12px); }
.project-card:hover { border-color: var(--accent, #0A84FF); box-shadow: 0 0 30px rgba(10, 132, 255, 0.15); }
.card-header { display: flex; justify-content: space-between; align-items: center; margin-bottom: 1rem; }
.folder-icon { font-size: 1.5rem; opacity: 0.8; }
.card-links { display: flex; gap: 0.75rem; }
.card-links a { color: #6E6E73; }
.card-links a:hover { color: var(--accent, #0A84FF); }
.project-title { color: #F5F5F7; font-family: "JetBrains Mono", "Fira Code", monospace; }
.project-desc { color: #A1A1A6; }
.topic-list { display: flex; gap: 0.75rem; flex-wrap: wrap; list-style: none; font-family: "JetBrains Mono", monospace; font-size: 0.75rem; color: var(--accent, #0A84FF); }
.project-footer { display: flex; justify-content: space-between; align-items: center; margin-top: 1.5rem; padding-top: 1rem; border-top: 1px solid #2C2C2E; }
.project-langs { display: flex; align-items: center; gap: 0.5rem; }
.lang-dot { width: 10px; height: 10px; border-radius: 50%; }
.lang-name { font-size: 0.8rem; color: #6E6E73; }
.project-stats { display: flex; gap: 1rem; font-size: 0.8rem; color: #6E6E73; }
.projects-list { border: 1px solid #2C2C2E; border-radius: 16px; overflow: hidden; background: rgba(255,255,255,0.02); }
.project-row { border-bottom: 1px solid #2C2C2E; color: #F5F5F7; }
.project-row:last-child { border-bottom: none; }
.project-row:hover { background: rgba(255,255,255,0.04); }
.row-name { font-family: "JetBrains Mono", "Fira Code", monospace; }
.row-desc, .row-stats { color: #6E6E73; }
.footer { color: #6E6E73; }
.footer a { color: #A1A1A6; }
.footer a:hover { color: var(--accent, #0A84FF); }
"""

CREATIVE_STYLES = """
body { background: linear-gradient(135deg, #FDF2F8 0%, #EDE9FE 50%, #E0F2FE 100%); color: #1A1A1A; }
.portfolio-container { position: relative; }
.hero { padding: clamp(3rem, 8vw, 5rem) 0; }
.avatar { border: 5px solid white; box-shadow: 0 16px 48px rgba(0,0,0,0.15); }
.name { background: linear-gradient(135deg, #EC4899 0%, #8B5CF6 50%, #06B6D4 100%); -webkit-background-clip: text; -webkit-text-fill-color: transparent; background-clip: text; }
.bio { color: #6E6E73; }
.location { color: #86868B; }
.social-link { background: white; color: #6E6E73; box-shadow: 0 4px 12px rgba(0,0,0,0.08); }
.social-link:hover { box-shadow: 0 8px 24px rgba(139, 92, 246, 0.25); color: var(--primary, #8B5CF6); }
.section-title { color: #1A1A1A; text-align: center; }
.project-card { padding: 0; background: rgba(255,255,255,0.9); backdrop-filter: blur(12px); border-radius: 24px; overflow: hidden; box-shadow: 0 4px 24px rgba(0,0,0,0.06); position: relative; }
.project-card:hover { transform: translateY(-6px); box-shadow: 0 20px 48px rgba(139, 92, 246, 0.15); }
.card-accent { height: 5px; background: var(--card-gradient); }
.card-content { padding: 1.75rem; }
.card-top { display: flex; gap: 0.5rem; margin-bottom: 1rem; flex-wrap: wrap; }
.topic-tag { font-size: 0.65rem; padding: 0.3rem 0.75rem; background: #F5F5F7; border-radius: 20px; color: #6E6E73; text-transform: uppercase; letter-spacing: 0.06em; font-weight: 600; }
.project-title { color: #1A1A1A; margin-bottom: 0.75rem; }
.project-desc { color: #6E6E73; font-size: 0.875rem; }
.card-stats { font-size: 0.8rem; color: #EC4899; font-weight: 500; }
.card-bottom { margin-top: 1.5rem; display: flex; justify-content: space-between; align-items: center; flex-wrap: wrap; gap: 1rem; }
.lang-pills { display: flex; gap: 0.5rem; flex-wrap: wrap; }
.lang-pill { font-size: 0.7rem; padding: 0.3rem 0.75rem; background: linear-gradient(135deg, #FCE7F3 0%, #EDE9FE 100%); border-radius: 20px; color: #7C3AED; font-weight: 500; }
.card-actions { display: flex; gap: 0.5rem; }
.card-btn { font-size: 0.8rem; padding: 0.5rem 1.25rem; border-radius: 20px; background: #F5F5F7; color: #6E6E73; font-weight: 500; }
.card-btn:hover { background: #E5E5E7; color: #1A1A1A; }
.card-btn.primary { background: linear-gradient(135deg, var(--primary, #EC4899) 0%, var(--accent, #8B5CF6) 100%); color: white; }
.all-projects { background: rgba(255,255,255,0.9); border-radius: 24px; padding: 2rem; box-shadow: 0 4px 24px rgba(0,0,0,0.06); }
.projects-list { margin-top: 1.5rem; }
.project-row { padding: 1rem 1.25rem; border-radius: 16px; color: #1A1A1A; margin-bottom: 0.5rem; }
.project-row:hover { background: linear-gradient(135deg, rgba(252, 231, 243, 0.5) 0%, rgba(237, 233, 254, 0.5) 100%); }
.row-name { color: #7C3AED; }
.row-desc { color: #86868B; }
.row-stats { color: #EC4899; font-weight: 500; }
.footer { color: #86868B; margin-top: 3rem; }
.footer a { color: #7C3AED; }
"""

TEMPLATE_STYLES = {
    TemplateKind.MINIMAL: MINIMAL_STYLES,
    TemplateKind.DARK: DARK_STYLES,
    TemplateKind.CREATIVE: CREATIVE_STYLES,
}


def template_styles(template: TemplateKind) -> str:
    return BASE_STYLES + TEMPLATE_STYLES[TemplateKind(template)]
